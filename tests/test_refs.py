"""Tests for the Refs name/hash table."""

from gitgraph_layout.core.refs import Refs


def test_set_and_get():
    """Test pointing names at commits."""
    refs = Refs()
    refs.set("master", "a1").set("HEAD", "a1").set("dev", "b2")

    assert refs.get_commit("master") == "a1"
    assert refs.get_names("a1") == ["master", "HEAD"]
    assert refs.get_names("b2") == ["dev"]
    assert refs.get_all_names() == ["master", "HEAD", "dev"]


def test_moving_a_name_keeps_insertion_order():
    """Test that moving a ref updates both directions of the table."""
    refs = Refs()
    refs.set("master", "a1").set("dev", "a1")
    refs.set("master", "c3")

    assert refs.get_commit("master") == "c3"
    assert refs.get_names("a1") == ["dev"]
    assert refs.get_names("c3") == ["master"]
    assert refs.get_all_names() == ["master", "dev"]


def test_has_name_and_has_commit():
    """Test membership checks on names and hashes."""
    refs = Refs()
    refs.set("v1", "a1")

    assert refs.has_name("v1")
    assert not refs.has_name("a1")
    assert refs.has_commit("a1")
    assert not refs.has_commit("v1")


def test_delete():
    """Test removing a name."""
    refs = Refs()
    refs.set("feature", "f1").set("HEAD", "f1")
    refs.delete("feature")
    refs.delete("unknown")

    assert not refs.has_name("feature")
    assert refs.get_names("f1") == ["HEAD"]
    assert refs.has_commit("f1")

    refs.delete("HEAD")
    assert not refs.has_commit("f1")
    assert len(refs) == 0


def test_setting_same_commit_keeps_order():
    """Test that re-pointing a name at its own commit is a no-op."""
    refs = Refs()
    refs.set("master", "a1").set("HEAD", "a1").set("dev", "a1")
    refs.set("HEAD", "a1")

    assert refs.get_names("a1") == ["master", "HEAD", "dev"]
