"""Unit tests for ProductDjangoRepository.

Covers:
- get_by_id, list (paging + ordering), save, delete.
- Flexible look-ups: find_one by id vs. title/slug.
- Storage errors propagate untouched.
"""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit

MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


# ===========================================================================
# get_by_id
# ===========================================================================


class TestGetById:
    def test_returns_product_when_found(self, repo, make_product):
        product = make_product()
        result = repo.get_by_id(str(product.id))
        assert result is not None
        assert result.id == product.id

    def test_returns_none_when_not_found(self, repo):
        assert repo.get_by_id(MISSING_ID) is None

    def test_invalid_uuid_raises(self, repo):
        with pytest.raises(ValidationError):
            repo.get_by_id("not-a-uuid")


# ===========================================================================
# find_one / get_by_title_or_slug
# ===========================================================================


class TestFindOne:
    def test_by_id(self, repo, make_product):
        product = make_product()
        assert repo.find_one(str(product.id)).id == product.id

    def test_by_title_case_insensitive(self, repo, make_product):
        product = make_product(title="Quilted Jacket")
        assert repo.find_one("qUILTED jACKET").id == product.id

    def test_by_exact_non_ascii_title(self, repo, make_product):
        product = make_product(title="Café Noir")
        assert repo.find_one("Café Noir").id == product.id

    def test_by_non_ascii_title_with_ascii_case_change(self, repo, make_product):
        product = make_product(title="Café Noir")
        assert repo.find_one("CAFé NOIR").id == product.id

    def test_by_slug(self, repo, make_product):
        product = make_product(title="Quilted Jacket")
        assert repo.find_one("quilted_jacket").id == product.id

    def test_by_slug_lowercases_term(self, repo, make_product):
        product = make_product(title="Quilted Jacket", slug="qj")
        assert repo.find_one("QJ").id == product.id

    def test_uuid_shaped_term_never_matches_title(self, repo, make_product):
        make_product(title=MISSING_ID, slug="odd")
        assert repo.find_one(MISSING_ID) is None

    def test_returns_none_when_nothing_matches(self, repo, make_product):
        make_product()
        assert repo.find_one("nothing-here") is None

    def test_get_by_title_or_slug_ignores_ids(self, repo, make_product):
        product = make_product()
        assert repo.get_by_title_or_slug(str(product.id)) is None


# ===========================================================================
# list
# ===========================================================================


class TestList:
    def test_returns_page_in_id_order(self, repo, make_product):
        created = [make_product(title=f"Item {i}") for i in range(5)]
        page = repo.list(limit=2, offset=1)
        assert [p.id for p in page] == [created[1].id, created[2].id]

    def test_returns_empty_list_when_no_products(self, repo):
        assert repo.list(limit=10, offset=0) == []

    def test_offset_past_end_returns_empty(self, repo, make_product):
        make_product()
        assert repo.list(limit=10, offset=5) == []


# ===========================================================================
# save / delete
# ===========================================================================


class TestSave:
    def test_creates_new_product(self, repo):
        product = Product(title="New Product", size=["M"], gender="women")
        saved = repo.save(product)
        assert saved is product
        assert Product.objects.filter(id=saved.id).exists()
        assert saved.slug == "new_product"

    def test_updates_existing_product(self, repo, make_product):
        product = make_product()
        product.stock = 99
        repo.save(product)
        product.refresh_from_db()
        assert product.stock == 99

    def test_duplicate_title_propagates_integrity_error(self, repo, make_product):
        make_product(title="Taken")
        with pytest.raises(IntegrityError):
            repo.save(Product(title="Taken", slug="other", size=[], gender="men"))


class TestDelete:
    def test_hard_deletes_product(self, repo, make_product):
        product = make_product()
        product_id = product.id
        repo.delete(product)
        assert not Product.objects.filter(id=product_id).exists()
