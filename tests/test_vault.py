"""Tests for password lifecycle, enumeration and reconciliation.

Covers:
- create/get/update/delete round trips and type markers
- index consistency across create/delete sequences
- orphan handling in listings and predicates
- export/import file format
"""

import string

import pytest

from apppass.models import EntryKey, ExpiryKey, IndexKey, PasswordType, TypeKey
from apppass.settings import save_password_length
from apppass.store import EntryNotFoundError, StoreError
from apppass.vault import (
    EntryExistsError,
    InvalidNameError,
    ReservedNameError,
    Vault,
    get_vault_stats,
)

ALNUM = set(string.ascii_letters + string.digits)


class TestCreate:
    def test_custom_roundtrip(self, vault):
        vault.create_custom("svc", "p@ss w0rd!")
        assert vault.get("svc") == "p@ss w0rd!"
        assert vault.metadata.get_type("svc") is PasswordType.CUSTOM

    @pytest.mark.parametrize("length", [1, 8, 30, 128])
    def test_auto_length_contract(self, vault, length):
        password = vault.create_auto(f"app{length}", length)
        assert len(password) == length
        assert set(password) <= ALNUM
        assert vault.get(f"app{length}") == password

    def test_auto_marks_type(self, vault):
        vault.create_auto("gmail")
        assert vault.metadata.get_type("gmail") is PasswordType.AUTO

    def test_auto_uses_default_length(self, vault):
        assert len(vault.create_auto("gmail")) == 30

    def test_auto_uses_saved_length(self, vault):
        save_password_length(vault.store, 12)
        assert len(vault.create_auto("gmail")) == 12

    def test_zero_length_rejected(self, vault):
        with pytest.raises(ValueError):
            vault.create_auto("gmail", 0)
        assert not vault.index.exists()

    def test_duplicate_create_rejected(self, vault):
        first = vault.create_auto("gmail")
        with pytest.raises(EntryExistsError):
            vault.create_auto("gmail")
        assert vault.get("gmail") == first

    def test_duplicate_custom_rejected(self, vault):
        vault.create_auto("gmail")
        with pytest.raises(EntryExistsError):
            vault.create_custom("gmail", "other")

    @pytest.mark.parametrize("name", ["apppass_index", "x_type", "x_otp_expiry", ""])
    def test_reserved_names_rejected(self, vault, name):
        with pytest.raises(ReservedNameError):
            vault.create_custom(name, "value")
        assert not vault.index.exists()

    def test_delimiter_in_name_rejected(self, vault):
        with pytest.raises(InvalidNameError):
            vault.create_custom("work,mail", "secret")
        with pytest.raises(InvalidNameError):
            vault.create_auto("a,b")
        with pytest.raises(InvalidNameError):
            vault.generate_memorizable("wifi,home")
        assert not vault.store.exists(EntryKey("work,mail"))
        assert not vault.index.exists()

    def test_delimiter_name_leaves_index_intact(self, populated_vault):
        with pytest.raises(InvalidNameError):
            populated_vault.create_custom("work,mail", "secret")
        assert [r.name for r in populated_vault.list_entries()] == ["github", "gmail"]
        assert populated_vault.index.names() == ["github", "gmail"]

    def test_memorizable(self, vault):
        password = vault.generate_memorizable("wifi")
        first, number, last = password.split("-")
        assert first.isalpha() and last.isalpha()
        assert 10 <= int(number) <= 99
        assert vault.get("wifi") == password
        assert vault.metadata.resolve_type("wifi") is PasswordType.AUTO


class TestGet:
    def test_missing(self, vault):
        with pytest.raises(EntryNotFoundError):
            vault.get("missing")

    def test_reserved_name_is_not_found(self, vault):
        save_password_length(vault.store, 20)
        with pytest.raises(EntryNotFoundError):
            vault.get("password_length")


class TestUpdate:
    def test_regenerate_always_becomes_auto(self, vault):
        vault.create_custom("x", "v")
        password = vault.update_regenerate("x", 12)
        assert vault.metadata.get_type("x") is PasswordType.AUTO
        assert len(password) == 12
        assert vault.get("x") == password != "v"

    def test_update_custom(self, vault):
        vault.create_auto("x")
        vault.update_custom("x", "mine")
        assert vault.get("x") == "mine"
        assert vault.metadata.get_type("x") is PasswordType.CUSTOM

    def test_update_missing(self, vault):
        with pytest.raises(EntryNotFoundError):
            vault.update_regenerate("missing")
        with pytest.raises(EntryNotFoundError):
            vault.update_custom("missing", "v")
        assert not vault.index.exists()


class TestDelete:
    def test_delete_removes_entry_and_metadata(self, vault, store):
        vault.create_auto("gmail")
        vault.metadata.set_otp_expiry("gmail", 10)
        vault.delete("gmail")
        assert not store.exists(EntryKey("gmail"))
        assert not store.exists(TypeKey("gmail"))
        assert not store.exists(ExpiryKey("gmail"))
        assert not vault.index.exists()

    def test_second_delete_reports_not_found(self, vault, store):
        vault.create_auto("gmail")
        vault.delete("gmail")
        with pytest.raises(EntryNotFoundError):
            vault.delete("gmail")
        assert not store.exists(TypeKey("gmail"))

    def test_delete_missing_clears_leftovers(self, vault, store):
        vault.index.add("ghost")
        vault.metadata.set_type("ghost", "custom")
        with pytest.raises(EntryNotFoundError):
            vault.delete("ghost")
        assert not store.exists(TypeKey("ghost"))
        assert "ghost" not in vault.index


class TestIndexConsistency:
    def test_index_tracks_create_delete_sequence(self, vault):
        vault.create_auto("a")
        vault.create_custom("b", "v")
        vault.generate_memorizable("c")
        vault.delete("b")
        vault.create_custom("d", "v")
        vault.delete("a")
        assert vault.index.names() == ["c", "d"]
        vault.delete("c")
        vault.delete("d")
        assert not vault.index.exists()

    def test_index_never_lists_metadata_keys(self, vault, memory_keyring):
        vault.create_auto("gmail")
        vault.metadata.set_otp_expiry("gmail", 10)
        raw = vault.store.get(IndexKey())
        assert raw == "gmail"


class TestListing:
    def test_list_entries(self, populated_vault):
        records = populated_vault.list_entries()
        assert [r.name for r in records] == ["github", "gmail"]
        github = records[0]
        assert github.secret == "gh-secret"
        assert github.password_type is PasswordType.CUSTOM
        assert not github.is_otp

    def test_list_includes_otp_expiry(self, vault):
        vault.create_auto("temp")
        vault.metadata.set_otp_expiry("temp", 99)
        (record,) = vault.list_entries()
        assert record.otp_expiry == 99
        assert record.is_otp

    def test_orphan_self_heal(self, populated_vault):
        populated_vault.index.add("ghost")
        assert populated_vault.has_any_passwords()
        assert "ghost" in populated_vault.index

        names = [r.name for r in populated_vault.list_entries()]
        assert "ghost" not in names
        assert "ghost" not in populated_vault.index

    def test_only_orphans_leaves_no_index(self, vault):
        vault.index.add("ghost")
        assert vault.list_entries() == []
        assert not vault.index.exists()

    def test_predicates_skip_orphans_without_mutating(self, vault):
        vault.index.add("ghost")
        vault.metadata.set_type("ghost", "custom")
        assert not vault.has_any_passwords()
        assert not vault.has_custom_passwords()
        assert "ghost" in vault.index

    def test_type_predicates(self, vault):
        assert not vault.has_auto_passwords()
        vault.create_custom("c", "v")
        assert vault.has_custom_passwords()
        assert not vault.has_auto_passwords()
        vault.create_auto("a")
        assert vault.has_auto_passwords()

    def test_untyped_entry_counts_as_auto(self, vault, store):
        vault.create_custom("legacy", "v")
        store.delete(TypeKey("legacy"))
        assert vault.has_auto_passwords()
        assert not vault.has_custom_passwords()

    def test_unreadable_entry_is_skipped(self, populated_vault, broken_keyring):
        # Rebind the same records onto the failing backend
        store = populated_vault.store
        broken = Vault(store)
        broken_keyring.values.update(
            {
                (store.service, "apppass_index"): "github,gmail",
                (store.service, "gmail"): "x",
                (store.service, "github"): "y",
            }
        )
        broken_keyring.broken.add("gmail")
        assert [r.name for r in broken.list_entries()] == ["github"]
        assert "gmail" in broken.index
        assert broken.names() == ["github"]

    def test_stats(self, populated_vault):
        populated_vault.create_auto("otp")
        populated_vault.metadata.set_otp_expiry("otp", 1)
        assert get_vault_stats(populated_vault) == {
            "total": 3,
            "auto": 2,
            "custom": 1,
            "otp": 1,
        }


class TestOrphanedIndexCleanup:
    def test_no_index(self, vault):
        assert vault.cleanup_orphaned_index() is False

    def test_index_with_readable_entry_is_kept(self, populated_vault):
        populated_vault.index.add("ghost")
        assert populated_vault.cleanup_orphaned_index() is False
        assert populated_vault.index.exists()

    def test_index_with_no_readable_entry_is_dropped(self, vault):
        vault.index.add("ghost")
        vault.index.add("phantom")
        assert vault.cleanup_orphaned_index() is True
        assert not vault.index.exists()


class TestExportImport:
    def test_export_import_round_trip(self, vault, tmp_path):
        path = str(tmp_path / "f.csv")
        vault.create_custom("svc", "p@ss")
        assert vault.export_all(path) == 1
        vault.delete("svc")

        assert vault.import_all(path) == 1
        assert vault.get("svc") == "p@ss"
        assert vault.metadata.get_type("svc") is PasswordType.CUSTOM

    def test_export_format(self, populated_vault, tmp_path):
        path = tmp_path / "out.csv"
        populated_vault.export_all(str(path))
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "github,gh-secret"
        assert lines[1].startswith("gmail,")

    def test_export_empty_vault(self, vault, tmp_path):
        path = tmp_path / "out.csv"
        assert vault.export_all(str(path)) == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_import_marks_auto_entries_custom(self, vault, tmp_path):
        vault.create_auto("gmail")
        path = tmp_path / "in.csv"
        path.write_text("gmail,replaced\n", encoding="utf-8")
        assert vault.import_all(str(path)) == 1
        assert vault.get("gmail") == "replaced"
        assert vault.metadata.get_type("gmail") is PasswordType.CUSTOM

    def test_import_skips_malformed_lines(self, vault, tmp_path):
        path = tmp_path / "in.csv"
        path.write_text(
            "good, secret \n"
            "no-comma\n"
            "too,many,fields\n"
            "\n"
            "apppass_index,hijack\n"
            "also,fine\n",
            encoding="utf-8",
        )
        assert vault.import_all(str(path)) == 2
        assert vault.get("good") == "secret"
        assert vault.index.names() == ["also", "good"]

    def test_import_clears_otp_expiry(self, vault, tmp_path):
        vault.create_auto("temp")
        vault.metadata.set_otp_expiry("temp", 1)
        path = tmp_path / "in.csv"
        path.write_text("temp,kept\n", encoding="utf-8")
        vault.import_all(str(path))
        assert vault.metadata.get_otp_expiry("temp") is None

    def test_import_missing_file(self, vault, tmp_path):
        with pytest.raises(StoreError):
            vault.import_all(str(tmp_path / "nope.csv"))

    def test_export_to_unwritable_path(self, vault, tmp_path):
        with pytest.raises(StoreError):
            vault.export_all(str(tmp_path / "missing-dir" / "out.csv"))
