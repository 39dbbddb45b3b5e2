from typing import Any, Callable


# Transition callback: (from_state, to_state, payload) -> override state.
# A non-empty return value redirects the machine, "" or None keeps the requested state.
HandleTransition = Callable[[str, str, Any], str | None]

# Shown in place of an empty current state inside error messages
NIL_STATE = "<nil>"
