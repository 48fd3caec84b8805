import pytest

from bloodbank.exceptions import DuplicateUsername


def test_register_then_authenticate(directory):
    directory.register("alice", "s3cret")
    assert "alice" in directory
    assert directory.authenticate("alice", "s3cret")


def test_wrong_password_or_unknown_user(directory):
    directory.register("alice", "s3cret")
    assert not directory.authenticate("alice", "S3CRET")
    assert not directory.authenticate("bob", "s3cret")


def test_duplicate_username_keeps_first_password(directory, bank_logs):
    directory.register("alice", "first")
    with pytest.raises(DuplicateUsername):
        directory.register("alice", "second")

    assert directory.authenticate("alice", "first")
    assert not directory.authenticate("alice", "second")
    assert len(directory) == 1
    assert "username alice already exists" in bank_logs.text


def test_passwords_are_compared_as_plain_text(directory):
    # Current behaviour: no hashing, surrounding spaces are significant.
    directory.register("bob", " pw ")
    assert not directory.authenticate("bob", "pw")
    assert directory.authenticate("bob", " pw ")
