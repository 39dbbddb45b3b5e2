from typing import Any

from loguru import logger

from statetable import (
    HandlerRegistry,
    IllegalTransitionError,
    StateMachine,
    Transition,
    configure_logging,
    new_handler,
)


def log_install(from_state: str, to_state: str, payload: Any) -> str | None:
    """Handler of Ready -> Installing, falls back to Damaged when the package is missing."""
    logger.info(f"Installing from {from_state}, payload: {payload}")
    if not payload:
        return "Damaged"
    return None


def build_installer(registry: HandlerRegistry) -> StateMachine:
    """Package installer lifecycle."""
    return StateMachine("installer", [
        Transition("Unchecked", "Ready"),
        Transition("Ready", "Installing", new_handler("start-install", log_install)),
        Transition("Ready", "Damaged"),
        Transition("Installing", "Running"),
        Transition("Installing", "Failed"),
        Transition("Running", "Ready"),
        Transition("Failed", "Damaged"),
        Transition("Failed", "Ready"),
    ], "Unchecked", registry=registry)


def run() -> None:
    """入口函数，演示状态机的转换、快照与恢复"""
    configure_logging()
    registry = HandlerRegistry()

    installer = build_installer(registry)
    logger.info(f"Created {installer}, terminate states: {sorted(installer.get_terminate_states())}")

    installer.transition("Ready")
    try:
        installer.transition("Ready")
    except IllegalTransitionError as e:
        logger.warning(e)

    logger.info(f"Next states from {installer.get_current_state()}: {installer.get_next_states()}")
    installer.transition("Installing", {"package": "demo"})

    data = installer.to_json()
    logger.info(f"Snapshot: {data}")

    restored = StateMachine.from_json(data, registry=registry)
    logger.info(f"Restored {restored}, equal to original: {restored == installer}")

    restored.transition("Failed")
    restored.transition("Ready")
    restored.transition("Installing")
    logger.info(f"Restored machine ended in {restored.get_current_state()}, terminated: {restored.is_terminated()}")


if __name__ == "__main__":
    run()
