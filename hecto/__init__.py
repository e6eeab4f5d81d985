"""hecto - a small terminal text editor."""

from .buffer import Buffer, BufferLoadError, BufferSaveError, HectoError
from .line import Fragment, GraphemeWidth, Line
from .position import Position, Size
from .view import RenderSink, View

__all__ = [
    'Buffer',
    'BufferLoadError',
    'BufferSaveError',
    'Fragment',
    'GraphemeWidth',
    'HectoError',
    'Line',
    'Position',
    'RenderSink',
    'Size',
    'View',
]
