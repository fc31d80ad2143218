"""
Fixtures compartidas para los tests.

Cada test usa una base SQLite en memoria propia a través de `SqlBackend`,
así que nunca se toca `DATABASE_URL` ni Supabase.
"""

import pytest

from recipe_magic_core.config import get_settings
from recipe_magic_core.db.database import make_engine
from recipe_magic_core.db.sql_backend import SqlBackend, create_tables
from recipe_magic_core.domain_models import UserContext


SAMPLE_OUTPUT = """Title: Chicken Biryani
Description: Fragrant basmati rice layered with spiced chicken.

Ingredients:
- 2 cups basmati rice
- 500 g chicken thighs
* 1 tsp garam masala

Instructions:
1. Soak the rice for 30 minutes.
2. Marinate the chicken with yogurt and spices.
3. Layer rice and chicken, then cook on low heat.

prep_time in minutes: 20
cook_time in minutes: 45
servings: 4
difficulty: Medium
cuisine_type: Indian
dietary_tags: gluten-free, halal
"""


@pytest.fixture(autouse=True)
def fresh_settings():
    """La configuración se relee del entorno en cada test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine():
    """Engine SQLite en memoria con las tablas creadas."""
    eng = make_engine("sqlite://")
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def backend(engine):
    return SqlBackend(engine)


@pytest.fixture
def user():
    return UserContext(user_id="user-1", email="cook@example.com", access_token="token-1")


@pytest.fixture
def other_user():
    return UserContext(user_id="user-2", email="other@example.com", access_token="token-2")


@pytest.fixture
def sample_output():
    """Texto con la plantilla completa que devuelve el webhook."""
    return SAMPLE_OUTPUT
