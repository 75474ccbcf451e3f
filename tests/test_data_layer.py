"""Consolidated data layer tests.

Covers the catalog entities and tables, the generic repository (using an
in-memory SQLite database with foreign keys enforced) and the unit of work.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.catalogo.core.unit_of_work import UnitOfWork
from src.catalogo.entities import (
    Marca,
    MarcaTable,
    Producto,
    ProductoRepository,
    ProductoTable,
    RefreshToken,
    RefreshTokenTable,
)
from tests.fixtures.core import add_producto


class TestProductoEntity:
    """Test Producto domain entity."""

    def test_producto_creation(self):
        producto = Producto(
            nombre="Leche", precio=Decimal("1.50"), marca_id=1, categoria_id=2
        )

        assert producto.id is None
        assert producto.fecha_creacion is None
        assert producto.marca is None
        assert producto.precio == Decimal("1.50")

    def test_producto_equality(self):
        """Should compare products by business attributes, ignoring timestamps."""
        from datetime import datetime

        a = Producto(id=1, nombre="Pan", precio=Decimal("2"), marca_id=1, categoria_id=1)
        b = Producto(
            id=1,
            nombre="Pan",
            precio=Decimal("2"),
            marca_id=1,
            categoria_id=1,
            fecha_creacion=datetime(2024, 1, 1),
        )
        c = a.model_copy(update={"nombre": "Pan integral"})

        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_precio_rejects_extra_decimals(self):
        with pytest.raises(ValueError):
            Producto(nombre="X", precio=Decimal("1.999"), marca_id=1, categoria_id=1)


class TestTables:
    """Test table mapping and store-enforced invariants."""

    def test_table_names(self):
        assert ProductoTable.__tablename__ == "Producto"
        assert MarcaTable.__tablename__ == "Marca"
        assert RefreshTokenTable.__tablename__ == "RefreshToken"

    def test_store_assigns_id_and_creation_timestamp(self, engine, catalog_refs):
        producto_id = add_producto(
            engine, "Leche", catalog_refs["La Serenísima"], catalog_refs["Lácteos"]
        )

        with Session(engine) as s:
            row = s.get(ProductoTable, producto_id)
            assert row is not None
            assert row.fecha_creacion is not None

    def test_foreign_keys_are_enforced(self, session: Session):
        session.add(ProductoTable(nombre="Huérfano", marca_id=99, categoria_id=99))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_refresh_token_roundtrip(self, session: Session):
        from datetime import UTC, datetime, timedelta

        now = datetime.now(UTC)
        session.add(
            RefreshTokenTable(
                usuario_id=1,
                token="abc",
                expires=now + timedelta(days=1),
                created=now,
            )
        )
        session.commit()

        row = session.exec(select(RefreshTokenTable)).one()
        token = RefreshToken.model_validate(row, from_attributes=True)
        assert token.is_active
        assert not token.is_expired


class TestProductoRepository:
    """Test the repository over a real database."""

    @pytest.fixture
    def repo(self, session: Session) -> ProductoRepository:
        return ProductoRepository(session)

    @pytest.fixture
    def productos(self, engine, catalog_refs) -> dict[str, int]:
        marca = catalog_refs["La Serenísima"]
        lacteos = catalog_refs["Lácteos"]
        panaderia = catalog_refs["Panadería"]
        return {
            nombre: add_producto(engine, nombre, marca, categoria)
            for nombre, categoria in (
                ("Leche", lacteos),
                ("Pan", panaderia),
                ("Yogur de leche", lacteos),
                ("Medialunas", panaderia),
                ("Queso", lacteos),
            )
        }

    def test_get_by_id_loads_navigations(self, repo, productos):
        producto = repo.get_by_id(productos["Leche"])

        assert producto is not None
        assert producto.nombre == "Leche"
        assert producto.marca == Marca(id=producto.marca_id, nombre="La Serenísima")
        assert producto.categoria is not None
        assert producto.categoria.nombre == "Lácteos"

    def test_get_by_id_missing_returns_none(self, repo, productos):
        assert repo.get_by_id(9999) is None

    def test_get_all(self, repo, productos):
        result = repo.get_all()
        assert [p.nombre for p in result] == list(productos)

    def test_get_page_without_search(self, repo, productos):
        total, page = repo.get_page(page_index=2, page_size=2)

        assert total == 5
        assert [p.nombre for p in page] == ["Yogur de leche", "Medialunas"]

    def test_get_page_search_is_case_insensitive(self, repo, productos):
        total, page = repo.get_page(page_index=1, page_size=10, search="LECHE")

        assert total == 2
        assert {p.nombre for p in page} == {"Leche", "Yogur de leche"}

    def test_get_page_search_escapes_wildcards(self, repo, productos):
        total, page = repo.get_page(page_index=1, page_size=10, search="%")
        assert total == 0
        assert page == []

    def test_get_page_beyond_last_page(self, repo, productos):
        total, page = repo.get_page(page_index=10, page_size=2)
        assert total == 5
        assert page == []

    def test_get_page_far_beyond_last_page(self, repo, productos):
        total, page = repo.get_page(page_index=10**18, page_size=50)
        assert total == 5
        assert page == []

    @pytest.mark.parametrize("page_index,page_size", [(0, 5), (1, 0)])
    def test_get_page_rejects_invalid_arguments(self, repo, page_index, page_size):
        with pytest.raises(ValueError):
            repo.get_page(page_index=page_index, page_size=page_size)

    def test_update_missing_row_raises(self, repo, catalog_refs):
        producto = Producto(
            id=404,
            nombre="Nada",
            marca_id=catalog_refs["Bimbo"],
            categoria_id=catalog_refs["Panadería"],
        )
        with pytest.raises(ValueError):
            repo.update(producto)


class TestUnitOfWork:
    """Test staged mutations and atomic commits."""

    def test_add_is_not_durable_until_save(self, engine, uow: UnitOfWork, catalog_refs):
        producto = Producto(
            nombre="Pan",
            precio=Decimal("3.25"),
            marca_id=catalog_refs["Bimbo"],
            categoria_id=catalog_refs["Panadería"],
        )
        uow.productos.add(producto)

        with Session(engine) as other:
            assert other.exec(select(ProductoTable)).all() == []

        uow.save()

        assert producto.id is not None
        assert producto.fecha_creacion is not None
        with Session(engine) as other:
            assert other.get(ProductoTable, producto.id).nombre == "Pan"

    def test_update_preserves_creation_timestamp(self, engine, uow, catalog_refs):
        producto_id = add_producto(
            engine, "Pan", catalog_refs["Bimbo"], catalog_refs["Panadería"]
        )
        existing = uow.productos.get_by_id(producto_id)
        created = existing.fecha_creacion

        changed = existing.model_copy(
            update={"nombre": "Pan lactal", "fecha_creacion": None}
        )
        uow.productos.update(changed)
        uow.save()

        stored = uow.productos.get_by_id(producto_id)
        assert stored.nombre == "Pan lactal"
        assert stored.fecha_creacion == created
        assert changed.fecha_creacion == created

    def test_remove(self, engine, uow, catalog_refs):
        producto_id = add_producto(
            engine, "Pan", catalog_refs["Bimbo"], catalog_refs["Panadería"]
        )
        producto = uow.productos.get_by_id(producto_id)

        uow.productos.remove(producto)
        uow.save()

        assert uow.productos.get_by_id(producto_id) is None

    def test_save_commits_several_mutations_atomically(self, engine, uow, catalog_refs):
        ok = Producto(
            nombre="Leche",
            marca_id=catalog_refs["La Serenísima"],
            categoria_id=catalog_refs["Lácteos"],
        )
        broken = Producto(nombre="Sin marca", marca_id=999, categoria_id=999)
        uow.productos.add(ok)
        uow.productos.add(broken)

        with pytest.raises(IntegrityError):
            uow.save()

        assert ok.id is None
        with Session(engine) as other:
            assert other.exec(select(ProductoTable)).all() == []

    def test_repositories_are_created_lazily_and_reused(self, uow):
        assert uow.productos is uow.productos
        assert uow.marcas is not None
        assert uow.categorias.get_all() == []

    def test_context_manager_closes_session(self, session):
        with UnitOfWork(session) as unit:
            assert unit.marcas.get_all() == []
