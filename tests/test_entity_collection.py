"""Tests for EntityCollection."""

import pytest

from entity_bridge import EntityCollection

from .models import Tag


def make_tags():
    return EntityCollection([Tag(id=1, name="a"), Tag(id=2, name="b"), Tag(id=3, name="c")])


class TestEntityCollectionBasics:
    """Tests for construction and read access."""

    def test_empty(self):
        collection = EntityCollection()

        assert collection.is_empty()
        assert collection.length == 0
        assert collection.first() is None
        assert collection.last() is None

    def test_wraps_list(self):
        """Test the given list is wrapped, not copied."""
        entities = [Tag(id=1, name="a")]
        collection = EntityCollection(entities)

        entities.append(Tag(id=2, name="b"))

        assert collection.count() == 2

    def test_from_iterable(self):
        collection = EntityCollection(Tag(id=i, name=str(i)) for i in range(3))

        assert len(collection) == 3
        assert [tag.id for tag in collection] == [0, 1, 2]

    def test_access(self):
        tags = make_tags()

        assert tags.first().id == 1
        assert tags.last().id == 3
        assert tags[1].name == "b"

    def test_to_list_is_a_copy(self):
        tags = make_tags()
        entities = tags.to_list()
        entities.clear()

        assert tags.length == 3

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(EntityCollection())


class TestEntityCollectionQueries:
    """Tests for predicates and derived collections."""

    def test_some_and_find(self):
        tags = make_tags()

        assert tags.some(lambda tag: tag.name == "b")
        assert not tags.some(lambda tag: tag.id > 3)
        assert tags.find(lambda tag: tag.id > 1).id == 2
        assert tags.find(lambda tag: tag.id > 3) is None

    def test_filter(self):
        tags = make_tags()
        filtered = tags.filter(lambda tag: tag.id > 1)

        assert [tag.id for tag in filtered] == [2, 3]
        assert tags.length == 3

    def test_slice(self):
        tags = make_tags()

        assert [tag.id for tag in tags.slice(1)] == [2, 3]
        assert [tag.id for tag in tags.slice(0, 2)] == [1, 2]
        assert [tag.id for tag in tags.slice(-1)] == [3]

    def test_push(self):
        tags = EntityCollection()

        assert tags.push(Tag(id=1, name="a"), Tag(id=2, name="b")) == 2
        assert tags.last().id == 2

    def test_equality(self):
        assert make_tags() == make_tags()
        assert make_tags() != make_tags().slice(1)

    def test_slice_key(self):
        """Test slicing with [] gives a collection like slice()."""
        tags = make_tags()

        head = tags[0:2]

        assert isinstance(head, EntityCollection)
        assert head == tags.slice(0, 2)
        assert [tag.id for tag in tags[::-1]] == [3, 2, 1]
        assert tags[-1].id == 3
