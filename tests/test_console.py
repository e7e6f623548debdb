"""Tests for the interactive console menu.

Prompts are patched so each menu action runs against the in-memory keyring.
"""

from unittest.mock import MagicMock, patch

from apppass.console import (
    MainMenu,
    build_menu_choices,
    display_welcome_banner,
    handle_choice,
    run_interactive_console,
)


def _prompts(*answers):
    return patch("apppass.console.ui.prompt", side_effect=list(answers))


class TestMenuChoices:
    def test_empty_vault_annotations(self, vault):
        titles = [choice.title for choice in build_menu_choices(vault)]
        assert "List All Passwords (No passwords)" in titles
        assert "Update Password (Regenerate) (No auto)" in titles
        assert "Update Password (Custom) (No custom)" in titles
        assert "Exit" in titles

    def test_populated_vault_has_plain_titles(self, populated_vault):
        titles = [choice.title for choice in build_menu_choices(populated_vault)]
        assert "List All Passwords" in titles
        assert "Update Password (Custom)" in titles

    def test_every_menu_item_is_offered(self, vault):
        values = [choice.value for choice in build_menu_choices(vault)]
        assert values == list(MainMenu)


class TestWelcomeBanner:
    def test_banner_shows_entry_counts(self, populated_vault, manager, capsys):
        manager.generate("bank", 60)
        display_welcome_banner(populated_vault)
        out = capsys.readouterr().out
        assert "apppass-test" in out
        assert "2 / 1 / 1" in out


class TestHandleChoice:
    def test_exit(self, vault, manager):
        assert handle_choice(vault, manager, MainMenu.EXIT) is False

    def test_create_auto_with_default_length(self, vault, manager):
        with _prompts("gmail", ""):
            assert handle_choice(vault, manager, MainMenu.CREATE_AUTO) is True
        assert len(vault.get("gmail")) == 30

    def test_create_auto_with_length(self, vault, manager):
        with _prompts("gmail", "16"):
            handle_choice(vault, manager, MainMenu.CREATE_AUTO)
        assert len(vault.get("gmail")) == 16

    def test_create_auto_bad_length(self, vault, manager, capsys):
        with _prompts("gmail", "lots"):
            handle_choice(vault, manager, MainMenu.CREATE_AUTO)
        assert "'lots' is not a number" in capsys.readouterr().out
        assert not vault.index.exists()

    def test_create_empty_name(self, vault, manager, capsys):
        with _prompts("  "):
            handle_choice(vault, manager, MainMenu.CREATE_AUTO)
        assert "cannot be empty" in capsys.readouterr().out

    def test_create_custom(self, vault, manager):
        with _prompts("github"), patch(
            "apppass.console._ask_secret", return_value="tok"
        ):
            handle_choice(vault, manager, MainMenu.CREATE_CUSTOM)
        assert vault.get("github") == "tok"

    def test_list_empty(self, vault, manager, capsys):
        handle_choice(vault, manager, MainMenu.LIST)
        assert "No passwords to list" in capsys.readouterr().out

    def test_list(self, populated_vault, manager, capsys):
        with patch("apppass.console.ui.confirm", return_value=True):
            handle_choice(populated_vault, manager, MainMenu.LIST)
        assert "gh-secret" in capsys.readouterr().out

    def test_get_copies(self, populated_vault, manager):
        with _prompts("github"), patch("apppass.ui.copy_with_feedback") as copy:
            handle_choice(populated_vault, manager, MainMenu.GET)
        copy.assert_called_once_with("gh-secret")

    def test_update_auto_requires_auto_entries(self, vault, manager, capsys):
        vault.create_custom("github", "tok")
        handle_choice(vault, manager, MainMenu.UPDATE_AUTO)
        assert "No auto-generated passwords" in capsys.readouterr().out

    def test_update_auto(self, populated_vault, manager):
        with _prompts("github", "20"):
            handle_choice(populated_vault, manager, MainMenu.UPDATE_AUTO)
        assert len(populated_vault.get("github")) == 20

    def test_update_custom(self, populated_vault, manager):
        with _prompts("gmail"), patch(
            "apppass.console._ask_secret", return_value="mine"
        ):
            handle_choice(populated_vault, manager, MainMenu.UPDATE_CUSTOM)
        assert populated_vault.get("gmail") == "mine"

    def test_delete_confirmed(self, populated_vault, manager):
        with _prompts("gmail"), patch("apppass.console.ui.confirm", return_value=True):
            handle_choice(populated_vault, manager, MainMenu.DELETE)
        assert populated_vault.index.names() == ["github"]

    def test_delete_declined(self, populated_vault, manager, capsys):
        with _prompts("gmail"), patch("apppass.console.ui.confirm", return_value=False):
            handle_choice(populated_vault, manager, MainMenu.DELETE)
        assert "Cancelled" in capsys.readouterr().out
        assert "gmail" in populated_vault.index

    def test_otp(self, vault, manager, scheduler):
        with _prompts("bank", "90"):
            handle_choice(vault, manager, MainMenu.OTP)
        assert manager.remaining_seconds("bank") == 90
        assert scheduler.pending() == ["bank"]

    def test_memorizable(self, vault, manager):
        with _prompts("wifi"):
            handle_choice(vault, manager, MainMenu.MEMORIZABLE)
        assert vault.get("wifi").count("-") == 2

    def test_export_import(self, populated_vault, manager, tmp_path):
        path = str(tmp_path / "backup.csv")
        with _prompts(path):
            handle_choice(populated_vault, manager, MainMenu.EXPORT)
        populated_vault.delete("github")
        with _prompts(path):
            handle_choice(populated_vault, manager, MainMenu.IMPORT)
        assert populated_vault.get("github") == "gh-secret"

    def test_settings(self, vault, manager):
        with _prompts("24"):
            handle_choice(vault, manager, MainMenu.SETTINGS)
        assert vault.default_length() == 24


class TestRunInteractiveConsole:
    def _select(self, *answers):
        question = MagicMock()
        question.ask.side_effect = list(answers)
        return patch("apppass.console.questionary.select", return_value=question)

    def test_exit_ends_loop(self, vault, manager, capsys):
        with self._select(MainMenu.EXIT):
            run_interactive_console(vault, manager)
        assert "Goodbye!" in capsys.readouterr().out

    def test_escape_ends_loop(self, vault, manager, capsys):
        with self._select(None):
            run_interactive_console(vault, manager)
        assert "Goodbye!" in capsys.readouterr().out

    def test_keyboard_interrupt(self, vault, manager, capsys):
        with self._select(KeyboardInterrupt()):
            run_interactive_console(vault, manager)
        assert "Cancelled" in capsys.readouterr().out

    def test_locked_session_stops(self, vault, manager, capsys):
        with self._select(MainMenu.LIST, MainMenu.EXIT), patch(
            "apppass.console.AutoLock"
        ) as lock_cls:
            lock_cls.return_value.locked = True
            run_interactive_console(vault, manager, lock_timeout=5)
        out = capsys.readouterr().out
        assert "locked due to inactivity" in out
        lock_cls.return_value.stop.assert_called_once()

    def test_lock_is_touched_after_each_action(self, vault, manager):
        with self._select(MainMenu.LIST, MainMenu.EXIT), patch(
            "apppass.console.AutoLock"
        ) as lock_cls:
            lock_cls.return_value.locked = False
            run_interactive_console(vault, manager, lock_timeout=5)
        lock_cls.assert_called_once_with(5)
        lock_cls.return_value.touch.assert_called_once()
