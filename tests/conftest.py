import pytest
from hecto.editor import Editor


@pytest.fixture
def make_editor():
    """Create Editors that get their resize pipe closed after the test."""
    editors = []

    def factory(*args, **kwargs):
        editor = Editor(*args, **kwargs)
        editors.append(editor)
        return editor

    yield factory
    for editor in editors:
        editor.close()
