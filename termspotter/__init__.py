# termspotter/__init__.py
from .LectureSession import LectureSession
from .SessionManager import SessionManager
from .Configuration import load_config, ConfigurationError
from .types import TermEntry, MatchResult, SurfacedTerm, DisplayState, DisplayStatus

__all__ = [
    'LectureSession',
    'SessionManager',
    'load_config',
    'ConfigurationError',
    'TermEntry',
    'MatchResult',
    'SurfacedTerm',
    'DisplayState',
    'DisplayStatus'
]
