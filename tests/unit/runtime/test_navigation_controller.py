"""Tests for the navigation controller state machine."""

from __future__ import annotations

import errno
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from keydir.entries import Page
from keydir.errors import KeySpaceExhausted, ListingFailed
from keydir.input.key_registry import SIDE_COMMAND_KEYS
from keydir.runtime import NavigationController, NavigationSession, SessionState
from keydir.runtime.config import MenuConfig
from keydir.sorting import SortMethod


def _make_controller(
    root: Path,
    *,
    current: Path | None = None,
    max_items: int = 40,
    sort_method: SortMethod = SortMethod.NAME,
    stay_open: bool = False,
    prompt=None,
    label_for=None,
) -> tuple[NavigationController, mock.Mock, mock.Mock]:
    file_action = mock.Mock(return_value=None)
    directory_action = mock.Mock(return_value=None)
    config = MenuConfig(root=root, max_items_per_page=max_items, default_sort_method=sort_method).validate()
    session = NavigationSession(
        root=root,
        current_directory=current or root,
        sort_method=sort_method,
        file_action=file_action,
        directory_action=directory_action,
        stay_open_after_file_action=stay_open,
    )
    controller = NavigationController(session, config, prompt=prompt, label_for=label_for)
    controller.start()
    return controller, file_action, directory_action


def _labels(controller: NavigationController) -> list[str]:
    page = controller.session.current_page
    assert page is not None
    return [item.label for item in page.items]


def _key_for(controller: NavigationController, label: str) -> str:
    page = controller.session.current_page
    assert page is not None
    return next(item.key for item in page.items if item.label == label)


class ControllerListingTests(unittest.TestCase):
    def test_initial_listing_sorted_by_name_with_distinct_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "b.txt").write_text("b", encoding="utf-8")
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / ".hidden").write_text("h", encoding="utf-8")
            (root / "sub").mkdir()

            controller, _file_action, _dir_action = _make_controller(root)

            self.assertEqual(len(controller.pages), 1)
            self.assertEqual(_labels(controller), ["a.txt", "b.txt", "sub/"])
            keys = [item.key for item in controller.pages[0].items]
            self.assertEqual(len(set(keys)), 3)
            self.assertEqual(controller.titles, [str(root)])
            self.assertIs(controller.session.state, SessionState.AWAITING_INPUT)

    def test_empty_directory_yields_single_empty_page(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            controller, _file_action, _dir_action = _make_controller(root)

            self.assertEqual(len(controller.pages), 1)
            self.assertEqual(controller.pages[0].items, ())

    def test_keys_are_unique_per_page_across_large_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for idx in range(250):
                (root / f"same{idx:03d}").write_text("x", encoding="utf-8")

            controller, _file_action, _dir_action = _make_controller(root, max_items=40)

            self.assertEqual(len(controller.pages), 7)
            for page in controller.pages:
                keys = [item.key for item in page.items]
                self.assertEqual(len(keys), len(set(keys)))
                self.assertNotIn("^", keys)
                self.assertNotIn(".", keys)
            self.assertEqual(controller.titles[0], f"{root} (1)")

    def test_custom_label_function_drives_labels_and_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "report.md").write_text("x", encoding="utf-8")

            controller, _file_action, _dir_action = _make_controller(
                root, label_for=lambda entry: entry.name.upper()
            )

            (item,) = controller.pages[0].items
            self.assertEqual(item.label, "REPORT.MD")
            self.assertEqual(item.key, "R")


class ControllerNavigationTests(unittest.TestCase):
    def test_select_directory_descends_and_ascend_returns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            sub = root / "sub"
            sub.mkdir()
            (sub / "inner.txt").write_text("x", encoding="utf-8")

            controller, _file_action, _dir_action = _make_controller(root)
            session_before = controller.session

            self.assertTrue(controller.dispatch(_key_for(controller, "sub/")))
            self.assertEqual(controller.session.current_directory, sub)
            self.assertEqual(_labels(controller), ["inner.txt"])
            self.assertIs(controller.session, session_before)

            self.assertTrue(controller.dispatch("^"))
            self.assertEqual(controller.session.current_directory, root)
            self.assertEqual(_labels(controller), ["sub/"])

    def test_ascend_at_root_is_a_no_op(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages
            index_before = controller.page_index

            self.assertTrue(controller.ascend())

            self.assertEqual(controller.session.current_directory, root)
            self.assertIs(controller.pages, pages_before)
            self.assertEqual(controller.page_index, index_before)

    def test_symlink_escaping_root_is_refused(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = base / "root"
            outside = base / "outside"
            root.mkdir()
            outside.mkdir()
            os.symlink(outside, root / "escape")

            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages

            self.assertTrue(controller.dispatch(_key_for(controller, "escape@")))

            self.assertEqual(controller.session.current_directory, root)
            self.assertIs(controller.pages, pages_before)
            self.assertIn("outside", controller.session.message)

    def test_select_file_runs_action_and_closes_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "a.txt"
            target.write_text("x", encoding="utf-8")
            controller, file_action, _dir_action = _make_controller(root)

            keep_open = controller.dispatch(_key_for(controller, "a.txt"))

            self.assertFalse(keep_open)
            file_action.assert_called_once_with(target)
            self.assertIs(controller.session.state, SessionState.CLOSED)
            self.assertFalse(controller.dispatch("a"))

    def test_select_file_can_keep_session_open(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("x", encoding="utf-8")
            controller, file_action, _dir_action = _make_controller(root, stay_open=True)
            file_action.return_value = "Cannot open: $EDITOR is not set."

            self.assertTrue(controller.dispatch(_key_for(controller, "a.txt")))

            self.assertIs(controller.session.state, SessionState.AWAITING_INPUT)
            self.assertEqual(controller.session.message, "Cannot open: $EDITOR is not set.")

    def test_current_directory_key_runs_directory_action(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            controller, _file_action, directory_action = _make_controller(root)

            self.assertFalse(controller.dispatch("."))

            directory_action.assert_called_once_with(root)

    def test_page_cycling_wraps(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for idx in range(5):
                (root / f"f{idx}").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root, max_items=2)

            self.assertEqual(controller.page_index, 1)
            controller.previous_page()
            self.assertEqual(controller.page_index, 3)
            controller.dispatch(SIDE_COMMAND_KEYS["next-page"])
            self.assertEqual(controller.page_index, 1)
            controller.next_page()
            controller.next_page()
            self.assertEqual(controller.page_index, 3)
            controller.go_to_page(2)
            self.assertEqual(controller.page_index, 2)
            controller.go_to_page(9)
            self.assertEqual(controller.page_index, 2)

    def test_item_keys_are_looked_up_on_the_active_page_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("alpha", "beta", "gamma"):
                (root / name).write_text("x", encoding="utf-8")
            controller, file_action, _dir_action = _make_controller(root, max_items=2, stay_open=True)

            controller.dispatch("g")
            file_action.assert_not_called()

            controller.next_page()
            controller.dispatch("g")
            file_action.assert_called_once_with(root / "gamma")


class ControllerSortAndFilterTests(unittest.TestCase):
    def test_cycle_sort_six_times_restores_method(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            controller, _file_action, _dir_action = _make_controller(root)

            for _ in range(6):
                controller.cycle_sort(1)

            self.assertIs(controller.session.sort_method, SortMethod.NAME)

    def test_cycle_sort_reorders_current_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_bytes(b"1")
            (root / "b.txt").write_bytes(b"12345")
            (root / "c.txt").write_bytes(b"123")
            controller, _file_action, _dir_action = _make_controller(root, sort_method=SortMethod.EXTENSION)

            controller.dispatch(SIDE_COMMAND_KEYS["next-sort"])

            self.assertIs(controller.session.sort_method, SortMethod.SIZE)
            self.assertEqual(_labels(controller), ["b.txt", "c.txt", "a.txt"])
            self.assertEqual(controller.session.current_directory, root)

    def test_reverse_order_persists_across_descent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            sub = root / "sub"
            sub.mkdir()
            (sub / "x").write_text("x", encoding="utf-8")
            (sub / "y").write_text("y", encoding="utf-8")
            (root / "a").write_text("a", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)

            controller.dispatch(SIDE_COMMAND_KEYS["reverse-order"])
            self.assertEqual(_labels(controller), ["sub/", "a"])

            controller.dispatch(_key_for(controller, "sub/"))
            self.assertEqual(_labels(controller), ["y", "x"])

    def test_filter_restricts_and_clears(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("notes.md", "main.py", "setup.py"):
                (root / name).write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)

            controller.set_filter(r"\.py$")
            self.assertEqual(_labels(controller), ["main.py", "setup.py"])
            self.assertEqual(controller.session.filter_pattern, r"\.py$")

            controller.set_filter(None)
            self.assertEqual(_labels(controller), ["main.py", "notes.md", "setup.py"])

    def test_invalid_filter_is_rejected_without_state_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages

            self.assertTrue(controller.set_filter("(unclosed"))

            self.assertIsNone(controller.session.filter_pattern)
            self.assertIs(controller.pages, pages_before)
            self.assertIn("Invalid pattern", controller.session.message)

    def test_filter_binding_uses_prompt(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("keep.txt", "skip.log"):
                (root / name).write_text("x", encoding="utf-8")
            prompt = mock.Mock(return_value="txt")
            controller, _file_action, _dir_action = _make_controller(root, prompt=prompt)

            self.assertTrue(controller.dispatch(SIDE_COMMAND_KEYS["filter"]))

            prompt.assert_called_once()
            self.assertEqual(_labels(controller), ["keep.txt"])

            prompt.return_value = None
            controller.dispatch(SIDE_COMMAND_KEYS["filter"])
            self.assertEqual(controller.session.filter_pattern, "txt")

    def test_highlight_flags_matches_without_changing_membership(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("todo.txt", "done.txt", "todo-old.md"):
                (root / name).write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)

            controller.set_highlight("^todo")

            flags = {item.label: item.highlighted for item in controller.pages[0].items}
            self.assertEqual(flags, {"done.txt": False, "todo-old.md": True, "todo.txt": True})

    def test_toggle_display_only_flips_flag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages

            controller.dispatch(SIDE_COMMAND_KEYS["toggle-display"])

            self.assertTrue(controller.session.column_major_order)
            self.assertIs(controller.pages, pages_before)


    def test_toggle_persistence_keeps_menu_after_file_action(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("x", encoding="utf-8")
            controller, file_action, _dir_action = _make_controller(root)

            controller.dispatch(SIDE_COMMAND_KEYS["toggle-persistence"])
            self.assertTrue(controller.dispatch(_key_for(controller, "a.txt")))

            file_action.assert_called_once()
            self.assertFalse(controller.session.is_closed)


class ControllerFailureTests(unittest.TestCase):
    def test_listing_failure_keeps_previous_pages(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages

            with mock.patch(
                "keydir.runtime.controller.list_entries",
                side_effect=ListingFailed(root, "Permission denied"),
            ):
                controller.cycle_sort(1)

            self.assertIs(controller.pages, pages_before)
            self.assertIs(controller.session.sort_method, SortMethod.NAME)
            self.assertIn("Permission denied", controller.session.message)
            self.assertIs(controller.session.state, SessionState.AWAITING_INPUT)

    def test_removed_directory_during_descent_keeps_state(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            sub = root / "sub"
            sub.mkdir()
            controller, _file_action, _dir_action = _make_controller(root)
            key = _key_for(controller, "sub/")
            sub.rmdir()

            self.assertTrue(controller.dispatch(key))

            self.assertEqual(controller.session.current_directory, root)
            self.assertEqual(_labels(controller), ["sub/"])
            self.assertIn("Not a directory", controller.session.message)

    def test_failure_before_any_pages_shows_empty_page(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch(
                "keydir.runtime.controller.list_entries",
                side_effect=ListingFailed(root, "Input/output error"),
            ):
                controller, _file_action, _dir_action = _make_controller(root)

            self.assertEqual(controller.pages, [Page(index=1, title=str(root))])
            self.assertIn("Input/output error", controller.session.message)

    def test_permission_error_on_directory_stat_keeps_previous_pages(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages
            real_stat = os.stat

            def denied_for_root(path, *args, **kwargs):
                if isinstance(path, (str, os.PathLike)) and Path(path) == root:
                    raise PermissionError(errno.EACCES, "Permission denied", str(path))
                return real_stat(path, *args, **kwargs)

            with mock.patch("keydir.entries.fs.os.stat", side_effect=denied_for_root):
                self.assertTrue(controller.cycle_sort(1))

            self.assertIs(controller.pages, pages_before)
            self.assertIs(controller.session.sort_method, SortMethod.NAME)
            self.assertIn("Permission denied", controller.session.message)
            self.assertIs(controller.session.state, SessionState.AWAITING_INPUT)

    def test_exhausted_key_space_keeps_previous_pages(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").write_text("x", encoding="utf-8")
            controller, _file_action, _dir_action = _make_controller(root)
            pages_before = controller.pages

            with mock.patch(
                "keydir.runtime.controller.assign_keys",
                side_effect=KeySpaceExhausted("a"),
            ):
                self.assertTrue(controller.cycle_sort(1))

            self.assertIs(controller.pages, pages_before)
            self.assertIs(controller.session.sort_method, SortMethod.NAME)
            self.assertIn("No free key", controller.session.message)
            self.assertIs(controller.session.state, SessionState.AWAITING_INPUT)

    def test_exhausted_key_space_on_start_shows_empty_page(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").write_text("x", encoding="utf-8")
            with mock.patch(
                "keydir.runtime.controller.assign_keys",
                side_effect=KeySpaceExhausted("a"),
            ):
                controller, _file_action, _dir_action = _make_controller(root)

            self.assertEqual(controller.pages, [Page(index=1, title=str(root))])
            self.assertIn("No free key", controller.session.message)
            self.assertIs(controller.session.state, SessionState.AWAITING_INPUT)


class ControllerQuitTests(unittest.TestCase):
    def test_quit_and_quit_keep_window(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            controller, _file_action, _dir_action = _make_controller(root)
            self.assertFalse(controller.dispatch(SIDE_COMMAND_KEYS["quit"]))
            self.assertTrue(controller.session.is_closed)
            self.assertFalse(controller.session.keep_window)

            controller, _file_action, _dir_action = _make_controller(root)
            self.assertFalse(controller.dispatch(SIDE_COMMAND_KEYS["quit-keep-window"]))
            self.assertTrue(controller.session.is_closed)
            self.assertTrue(controller.session.keep_window)

    def test_unknown_key_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            controller, _file_action, _dir_action = _make_controller(root)
            self.assertTrue(controller.dispatch("C-z"))
            self.assertFalse(controller.session.is_closed)

    def test_side_bindings_and_help_lines_list_every_command(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            controller, _file_action, _dir_action = _make_controller(root)

            names = {binding.name for binding in controller.side_bindings()}
            self.assertEqual(names, set(SIDE_COMMAND_KEYS))
            help_text = "\n".join(controller.help_lines())
            self.assertIn("Parent directory", help_text)
            self.assertIn("Reverse order", help_text)

            controller.dispatch(SIDE_COMMAND_KEYS["help"])
            self.assertTrue(controller.session.show_help)


if __name__ == "__main__":
    unittest.main()
