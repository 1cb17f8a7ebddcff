# ecofinds/database/seed.py
"""
Schema creation and seed data.

Run ``python -m ecofinds.database.seed`` to load a demo user with sample
listings on top of the default categories.
"""

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
import logging

from .core import Base, SessionLocal, engine as default_engine
from .models import User
from .repository import MarketplaceRepository
from ..products.service import CategoryService
from ..utils.password_utils import get_password_hash

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@ecofinds.com"
DEMO_PASSWORD = "password123"

# (title, category, price_cents, condition, location, description)
SAMPLE_LISTINGS = [
    ("iPhone 13 Pro - Excellent Condition", "Electronics", 89900, "excellent", "New York, NY",
     "128GB, space gray. Battery health 98%. Original box and charger included."),
    ("Vintage Leather Jacket", "Clothing", 12500, "good", "Los Angeles, CA",
     "Classic brown leather jacket, size M. Genuine leather, well-maintained."),
    ("The Great Gatsby - First Edition", "Books", 250000, "excellent", "Boston, MA",
     "1925 first edition. Some wear to the dust jacket."),
    ("Indoor Plant Collection", "Home", 8500, "excellent", "Seattle, WA",
     "Five healthy houseplants in ceramic pots."),
    ("Vintage Board Game Collection", "Misc", 7500, "good", "Portland, OR",
     "Monopoly, Scrabble, Risk and Clue. All pieces present."),
    ("MacBook Air M1 - 2020", "Electronics", 75000, "excellent", "San Francisco, CA",
     "8GB RAM, 256GB SSD. Lightly used for 8 months."),
]


def init_db(bind: Engine = default_engine) -> None:
    """Create tables and make sure the default categories exist."""
    Base.metadata.create_all(bind=bind)
    with Session(bind=bind) as db:
        CategoryService.seed_categories(db)


def seed_demo_data(db: Session) -> int:
    """Create the demo user and its listings if absent. Returns the number of listings added."""
    repo = MarketplaceRepository(db)
    CategoryService.seed_categories(db)

    if repo.get_user_by_email(DEMO_EMAIL):
        logger.info("Demo user already present; skipping demo listings")
        return 0

    categories = {category.name: category.id for category in repo.get_categories()}
    try:
        demo_user: User = repo.create_user(
            email=DEMO_EMAIL,
            first_name="Demo",
            last_name="User",
            username="demouser",
            password_hash=get_password_hash(DEMO_PASSWORD),
        )
        for title, category, price_cents, condition, location, description in SAMPLE_LISTINGS:
            repo.create_product(
                demo_user.id,
                {
                    "title": title,
                    "description": description,
                    "category_id": categories.get(category),
                    "price_cents": price_cents,
                    "condition": condition,
                    "location": location,
                },
            )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created demo user {DEMO_EMAIL} with {len(SAMPLE_LISTINGS)} listings")
    return len(SAMPLE_LISTINGS)


if __name__ == "__main__":
    from ..logging import logger as root_logger

    init_db()
    with SessionLocal() as session:
        added = seed_demo_data(session)
    root_logger.info(f"Seeding complete: {added} listings added")
