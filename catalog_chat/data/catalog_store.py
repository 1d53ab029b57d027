"""Catalog helpers: read-only product queries for the chat pipeline.

Every query opens its own session and returns CatalogItem snapshots, so
nothing handed to the chat core is attached to a live session.
"""
from typing import Callable, List, Optional, Sequence

from sqlalchemy import desc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from .database import SessionLocal
from .models import OrderItem, Product, ProductReview
from ..app.errors import CatalogError
from ..schemas.io_models import CatalogItem


_ASSOCIATIONS = (
    selectinload(Product.brands),
    selectinload(Product.categories),
    selectinload(Product.features),
    selectinload(Product.tags),
)


def to_catalog_item(p: Product) -> CatalogItem:
    return CatalogItem(
        id=p.id,
        name=p.name or "",
        description=p.description,
        specs=p.detailed_specs,
        price=p.price,
        in_stock=bool(p.in_stock),
        release_date=p.release_date,
        brands=[b.name for b in p.brands],
        categories=[c.name for c in p.categories],
        features=[f.name for f in p.features],
        tags=[t.name for t in p.tags],
    )


class CatalogStore:
    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self.session_factory = session_factory or SessionLocal

    def _run(self, what: str, fn):
        db = self.session_factory()
        try:
            return fn(db)
        except SQLAlchemyError as e:
            raise CatalogError(f"{what} failed: {e}") from e
        finally:
            db.close()

    def list_products(self) -> List[CatalogItem]:
        def q(db: Session):
            rows = db.query(Product).options(*_ASSOCIATIONS).order_by(Product.id).all()
            return [to_catalog_item(p) for p in rows]
        return self._run("list_products", q)

    def products_by_ids(self, ids: Sequence[int]) -> List[CatalogItem]:
        """Return the products for ``ids``, in the order the ids were given."""
        if not ids:
            return []

        def q(db: Session):
            rows = db.query(Product).options(*_ASSOCIATIONS).filter(Product.id.in_(list(ids))).all()
            by_id = {p.id: to_catalog_item(p) for p in rows}
            return [by_id[i] for i in ids if i in by_id]
        return self._run("products_by_ids", q)

    def lowest_priced_product(self) -> Optional[CatalogItem]:
        def q(db: Session):
            p = (
                db.query(Product)
                .options(*_ASSOCIATIONS)
                .filter(Product.price.isnot(None))
                .order_by(Product.price.asc(), Product.id.asc())
                .first()
            )
            return to_catalog_item(p) if p is not None else None
        return self._run("lowest_priced_product", q)

    def has_order_history(self) -> bool:
        return self._run("has_order_history", lambda db: db.query(OrderItem.id).first() is not None)

    def best_selling_products(self, limit: int = 5) -> List[CatalogItem]:
        """Top products by summed order-line quantity."""
        def q(db: Session):
            total = func.sum(OrderItem.quantity).label("total_quantity")
            rows = (
                db.query(OrderItem.product_id, total)
                .group_by(OrderItem.product_id)
                .order_by(desc(total), OrderItem.product_id)
                .limit(limit)
                .all()
            )
            return [r.product_id for r in rows]
        ids = self._run("best_selling_products", q)
        return self.products_by_ids(ids)

    def top_rated_products(self, limit: int = 5, min_reviews: int = 2) -> List[CatalogItem]:
        """Top products by average rating (then rating count), ignoring unrated reviews."""
        def q(db: Session):
            avg_rating = func.avg(ProductReview.rating).label("avg_rating")
            n_ratings = func.count(ProductReview.rating).label("n_ratings")
            rows = (
                db.query(ProductReview.product_id, avg_rating, n_ratings)
                .filter(ProductReview.rating.isnot(None))
                .group_by(ProductReview.product_id)
                .having(func.count(ProductReview.rating) >= min_reviews)
                .order_by(desc(avg_rating), desc(n_ratings), ProductReview.product_id)
                .limit(limit)
                .all()
            )
            return [r.product_id for r in rows]
        ids = self._run("top_rated_products", q)
        return self.products_by_ids(ids)

    def count_products(self) -> int:
        return self._run("count_products", lambda db: db.query(Product).count())


# Provide a module-level singleton for convenience
_store: Optional[CatalogStore] = None


def get_catalog_store() -> CatalogStore:
    global _store
    if _store is None:
        _store = CatalogStore()
    return _store
