import os
import shutil
import tempfile
from unittest.mock import patch

import pytest
from hecto.buffer import Buffer
from hecto.keyboard import KeyEvent, KeyType


def regular(ch):
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


ENTER = KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw='\r')
ESCAPE = KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
BACKSPACE = KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw='\x7f')
CTRL_S = KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True)
CTRL_Q = KeyEvent(key_type=KeyType.CTRL, value='q', raw='\x11', is_ctrl=True)


@pytest.fixture
def temp_dir():
    path = tempfile.mkdtemp()
    yield path
    shutil.rmtree(path)


def test_save_file_creates_file(make_editor, temp_dir):
    """Test that save_file writes every line with a terminator."""
    editor = make_editor()
    editor.view.buffer = Buffer.from_lines(["First line", "Second line", "Third line"])
    editor.modified = True
    filename = os.path.join(temp_dir, "out.txt")

    assert editor.save_file(filename) is True

    with open(filename, 'r', encoding='utf-8') as f:
        assert f.read() == "First line\nSecond line\nThird line\n"
    assert editor.filename == filename
    assert editor.modified is False


def test_save_file_reports_missing_directory(make_editor, temp_dir):
    editor = make_editor()
    filename = os.path.join(temp_dir, "missing", "out.txt")

    assert editor.save_file(filename) is False

    assert editor.status_message == f"Error: Cannot save to {filename}"
    assert editor.filename is None


def test_save_file_reports_permission_denied(make_editor, temp_dir):
    editor = make_editor()
    filename = os.path.join(temp_dir, "out.txt")

    with patch('hecto.buffer.tempfile.NamedTemporaryFile', side_effect=PermissionError("denied")):
        assert editor.save_file(filename) is False

    assert editor.status_message == f"Error: Permission denied saving {filename}"


def test_load_file_sets_filename(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "in.txt")
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("Line 1\nLine 2\nLine 3\n")

    editor = make_editor()
    editor.load_file(filename)

    assert editor.filename == filename
    assert [str(line) for line in editor.view.buffer] == ["Line 1", "Line 2", "Line 3"]
    assert editor.modified is False


def test_load_missing_file_starts_new_document(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "new.txt")

    editor = make_editor()
    editor.load_file(filename)

    assert editor.filename == filename
    assert editor.view.buffer.is_empty()
    assert not os.path.exists(filename)


def test_load_undecodable_file_exits(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "binary.txt")
    with open(filename, 'wb') as f:
        f.write(b"ok\n\xff\xfe\xfd\n")

    editor = make_editor()
    with pytest.raises(SystemExit) as excinfo:
        editor.load_file(filename)
    assert excinfo.value.code == 1


def test_ctrl_s_with_filename_saves(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "doc.txt")
    editor = make_editor()
    editor.load_file(filename)
    editor._handle_key_event(regular('h'))
    editor._handle_key_event(regular('i'))
    assert editor.modified

    editor._handle_key_event(CTRL_S)

    assert editor.modified is False
    assert editor.status_message == f"Saved to {filename}"
    with open(filename, encoding='utf-8') as f:
        assert f.read() == "hi\n"


def test_ctrl_s_without_filename_prompts(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "typed.txt")
    editor = make_editor()
    editor._handle_key_event(regular('x'))

    editor._handle_key_event(CTRL_S)
    assert editor.prompt_mode == 'save_filename'

    for ch in filename + "z":
        editor._handle_key_event(regular(ch))
    editor._handle_key_event(BACKSPACE)
    assert editor.prompt_input == filename

    editor._handle_key_event(ENTER)

    assert editor.prompt_mode is None
    assert editor.filename == filename
    assert editor.status_message == f"Saved to {filename}"
    with open(filename, encoding='utf-8') as f:
        assert f.read() == "x\n"


def test_prompt_keys_do_not_edit_buffer(make_editor):
    editor = make_editor()
    editor._handle_key_event(CTRL_S)
    editor._handle_key_event(regular('a'))
    assert editor.view.buffer.is_empty()
    assert editor.prompt_input == "a"


def test_escape_cancels_filename_prompt(make_editor):
    editor = make_editor()
    editor._handle_key_event(CTRL_S)
    editor._handle_key_event(regular('a'))

    editor._handle_key_event(ESCAPE)

    assert editor.prompt_mode is None
    assert editor.prompt_input == ""
    assert editor.filename is None


def test_enter_with_empty_filename_keeps_prompting(make_editor):
    editor = make_editor()
    editor._handle_key_event(CTRL_S)
    editor._handle_key_event(ENTER)
    assert editor.prompt_mode == 'save_filename'


def test_quit_confirm_yes_without_filename_prompts_then_quits(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "quit.txt")
    editor = make_editor()
    editor.running = True
    editor._handle_key_event(regular('q'))

    editor._handle_key_event(CTRL_Q)
    assert editor.prompt_mode == 'quit_confirm'

    editor._handle_key_event(regular('y'))
    assert editor.prompt_mode == 'save_filename_quit'

    for ch in filename:
        editor._handle_key_event(regular(ch))
    editor._handle_key_event(ENTER)

    assert editor.running is False
    assert os.path.exists(filename)


def test_quit_confirm_yes_with_filename_saves_and_quits(make_editor, temp_dir):
    filename = os.path.join(temp_dir, "quit.txt")
    editor = make_editor()
    editor.load_file(filename)
    editor.running = True
    editor._handle_key_event(regular('a'))

    editor._handle_key_event(CTRL_Q)
    editor._handle_key_event(regular('Y'))

    assert editor.running is False
    with open(filename, encoding='utf-8') as f:
        assert f.read() == "a\n"
