from ecofinds.core.config import settings
from ecofinds.database.repository import MarketplaceRepository
from ecofinds.database.seed import DEMO_EMAIL, DEMO_PASSWORD, SAMPLE_LISTINGS, init_db, seed_demo_data
from ecofinds.products.service import CategoryService
from ecofinds.utils.password_utils import verify_password


def test_init_db_seeds_default_categories_once(engine, db_session):
    init_db(engine)
    init_db(engine)

    names = [category.name for category in CategoryService.list_categories(db_session)]
    assert sorted(names) == sorted(settings.DEFAULT_CATEGORIES)


def test_seed_categories_skips_populated_table(db_session, categories):
    assert CategoryService.seed_categories(db_session) == 0
    assert len(CategoryService.list_categories(db_session)) == len(categories)


def test_seed_demo_data(db_session):
    assert seed_demo_data(db_session) == len(SAMPLE_LISTINGS)
    assert seed_demo_data(db_session) == 0

    repo = MarketplaceRepository(db_session)
    demo = repo.get_user_by_email(DEMO_EMAIL)
    assert verify_password(DEMO_PASSWORD, demo.password_hash)
    assert len(repo.get_user_products(demo.id)) == len(SAMPLE_LISTINGS)
    assert all(product.category_id is not None for product in repo.get_user_products(demo.id))
