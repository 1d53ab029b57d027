import csv
import os
from datetime import datetime
from decimal import Decimal

from .database import SessionLocal, create_tables
from .models import Product, Brand, Category, Feature, Tag

PRODUCTS_CSV_PATH = os.path.join(os.path.dirname(__file__), "raw", "products.csv")


def _split(value):
    return [v.strip() for v in (value or "").split("|") if v.strip()]


def _get_or_create(db, model, cache, name):
    key = (model.__name__, name)
    if key not in cache:
        obj = db.query(model).filter(model.name == name).first()
        if obj is None:
            obj = model(name=name)
            db.add(obj)
        cache[key] = obj
    return cache[key]


def populate_products(csv_path=PRODUCTS_CSV_PATH, session_factory=None, bind=None):
    """Read products.csv and populate the products table (and its associations)."""
    # Ensure tables are created
    create_tables(bind=bind)

    db = (session_factory or SessionLocal)()
    try:
        if db.query(Product).count() > 0:
            print("Products table is not empty. Skipping population.")
            return 0

        cache = {}
        added = 0
        with open(csv_path, mode='r', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                price_raw = (row.get('price') or '').replace('$', '').strip()
                release_raw = (row.get('release_date') or '').strip()
                product = Product(
                    name=row['name'],
                    description=row.get('description'),
                    detailed_specs=row.get('detailed_specs'),
                    price=Decimal(price_raw) if price_raw else None,
                    in_stock=(row.get('in_stock') or '').strip().lower() in ('1', 'true', 'yes'),
                    release_date=datetime.fromisoformat(release_raw) if release_raw else None,
                )
                product.brands = [_get_or_create(db, Brand, cache, n) for n in _split(row.get('brands'))]
                product.categories = [_get_or_create(db, Category, cache, n) for n in _split(row.get('categories'))]
                product.features = [_get_or_create(db, Feature, cache, n) for n in _split(row.get('features'))]
                product.tags = [_get_or_create(db, Tag, cache, n) for n in _split(row.get('tags'))]
                db.add(product)
                added += 1

        db.commit()
        print(f"Successfully populated the products table ({added} products).")
        return added
    except Exception as e:
        db.rollback()
        print(f"Error populating products table: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    populate_products()
