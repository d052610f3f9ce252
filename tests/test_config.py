import pytest
from pydantic import ValidationError

from blog_api.config import DEFAULT_JWT_SECRET, Settings


def test_defaults_are_overridable():
    custom = Settings(PORT=8080, MAX_PAGE_SIZE=10, JWT_SECRET="abc")
    assert custom.PORT == 8080
    assert custom.MAX_PAGE_SIZE == 10
    assert custom.JWT_SECRET == "abc"


def test_development_allows_default_secret():
    assert Settings(APP_ENV="development").JWT_SECRET == DEFAULT_JWT_SECRET


@pytest.mark.parametrize("secret", [DEFAULT_JWT_SECRET, ""])
def test_production_refuses_default_secret(secret):
    with pytest.raises(ValidationError):
        Settings(APP_ENV="production", JWT_SECRET=secret)


def test_production_accepts_explicit_secret():
    prod = Settings(APP_ENV="production", JWT_SECRET="a-long-random-value")
    assert prod.APP_ENV == "production"
