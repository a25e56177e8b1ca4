"""
LectureState - Lecture lifecycle state with observer pattern.

Component observers are notified directly with (old_state, new_state),
outside the state lock. State mutations are protected by threading.Lock.

State Machine:
- idle -> active (lecture started)
- active -> idle (lecture stopped)
"""
import threading
from typing import Callable, Dict, List, Set


class LectureState:
    """
    Manages the lecture lifecycle with observer pattern.

    Attributes:
        _state: Current state ('idle', 'active')
        _lock: Thread lock for state mutations
        _component_observers: List of component observers (receive old_state, new_state)
    """

    _VALID_TRANSITIONS: Dict[str, Set[str]] = {
        'idle': {'active'},
        'active': {'idle'},
    }

    def __init__(self):
        self._state = 'idle'
        self._lock = threading.Lock()
        self._component_observers: List[Callable[[str, str], None]] = []

    def get_state(self) -> str:
        """
        Get current state (thread-safe).

        Returns:
            Current state string
        """
        with self._lock:
            return self._state

    def is_active(self) -> bool:
        return self.get_state() == 'active'

    def set_state(self, new_state: str) -> None:
        """
        Set new state and notify observers (thread-safe).

        Args:
            new_state: New state to transition to

        Raises ValueError
        """
        with self._lock:
            old_state = self._state

            if new_state not in self._VALID_TRANSITIONS.get(old_state, set()):
                raise ValueError(
                    f"Invalid state transition: {old_state} -> {new_state}"
                )

            self._state = new_state

        # Notify observers outside the lock to avoid deadlocks
        self._notify_observers(old_state, new_state)

    def register_component_observer(self, observer: Callable[[str, str], None]) -> None:
        """
        Args:
            observer: Callable that receives (old_state, new_state)
        """
        with self._lock:
            self._component_observers.append(observer)

    def _notify_observers(self, old_state: str, new_state: str) -> None:
        with self._lock:
            observers = list(self._component_observers)
        for observer in observers:
            observer(old_state, new_state)
