# wirebox/_state.py
import threading

_container = None
_lock = threading.Lock()
