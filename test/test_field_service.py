"""
Tests for the field service

Covers name validation, CRUD and the cascade of values on delete.
"""

import pytest

from extrafields.exceptions import FieldNotFoundError, ValidationError
from extrafields.i18n import Lexicon
from extrafields.services import field_service, value_service


class TestValidateFieldName:
    """Test validate_field_name()"""

    async def test_free_name_has_no_errors(self, test_db):
        errors = await field_service.validate_field_name(test_db, "bio")
        assert errors == []

    async def test_empty_name_is_rejected(self, test_db):
        errors = await field_service.validate_field_name(test_db, "   ")
        assert len(errors) == 1
        assert errors[0].field == "name"
        assert errors[0].message == "Please specify a name for the field."

    async def test_taken_name_is_rejected(self, test_db, bio_field):
        errors = await field_service.validate_field_name(test_db, "bio")
        assert [error.to_dict() for error in errors] == [
            {"id": "name", "msg": 'A field with the name "bio" already exists.'}
        ]

    async def test_field_may_keep_its_own_name(self, test_db, bio_field):
        errors = await field_service.validate_field_name(test_db, "bio", exclude_id=bio_field.id)
        assert errors == []

    async def test_uses_given_lexicon(self, test_db, bio_field):
        errors = await field_service.validate_field_name(test_db, "bio", lexicon=Lexicon("fr"))
        assert errors[0].message == 'Un champ nommé "bio" existe déjà.'


class TestCreateField:
    """Test create_field()"""

    async def test_create_field(self, test_db):
        field = await field_service.create_field(test_db, "  twitter  ", description="Handle", rank=3)
        assert field.id is not None
        assert field.name == "twitter"
        assert field.description == "Handle"
        assert field.rank == 3

    async def test_create_duplicate_raises(self, test_db, bio_field):
        with pytest.raises(ValidationError) as exc_info:
            await field_service.create_field(test_db, "bio")
        assert exc_info.value.field == "name"
        assert await field_service.count_fields(test_db) == 1

    async def test_create_without_name_raises(self, test_db):
        with pytest.raises(ValidationError):
            await field_service.create_field(test_db, "")
        assert await field_service.count_fields(test_db) == 0


class TestUpdateField:
    """Test update_field()"""

    async def test_rename(self, test_db, bio_field):
        field = await field_service.update_field(test_db, bio_field.id, "about")
        assert field.name == "about"
        assert field.description == "Short biography"

    async def test_rename_to_taken_name_leaves_both_unchanged(self, test_db, bio_field):
        other = await field_service.create_field(test_db, "website")

        with pytest.raises(ValidationError):
            await field_service.update_field(test_db, other.id, "bio")

        names = sorted(field.name for field in await field_service.get_fields(test_db))
        assert names == ["bio", "website"]

    async def test_update_missing_field_raises(self, test_db):
        with pytest.raises(FieldNotFoundError):
            await field_service.update_field(test_db, 999, "anything")


class TestDeleteField:
    """Test delete_field()"""

    async def test_delete_removes_field_and_values(self, test_db, bio_field):
        await value_service.set_value(test_db, bio_field.id, 42, "hello")
        await value_service.set_value(test_db, bio_field.id, 43, "world")

        deleted = await field_service.delete_field(test_db, bio_field.id)

        assert deleted.name == "bio"
        assert await field_service.get_field(test_db, bio_field.id) is None
        assert await value_service.count_values(test_db, bio_field.id) == 0

    async def test_delete_missing_field_raises(self, test_db):
        with pytest.raises(FieldNotFoundError):
            await field_service.delete_field(test_db, 999)


class TestListFields:
    """Test get_fields() and count_fields()"""

    async def test_ordered_by_rank(self, test_db):
        await field_service.create_field(test_db, "third", rank=30)
        await field_service.create_field(test_db, "first", rank=10)
        await field_service.create_field(test_db, "second", rank=20)

        fields = await field_service.get_fields(test_db)
        assert [field.name for field in fields] == ["first", "second", "third"]

    async def test_search_and_paging(self, test_db):
        for index, name in enumerate(["facebook", "twitter", "face_id"]):
            await field_service.create_field(test_db, name, rank=index)

        matches = await field_service.get_fields(test_db, search="face")
        assert [field.name for field in matches] == ["facebook", "face_id"]
        assert await field_service.count_fields(test_db, search="face") == 2

        page = await field_service.get_fields(test_db, skip=1, limit=1)
        assert [field.name for field in page] == ["twitter"]
