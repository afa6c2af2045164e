from typing import Protocol


class IKeyboardAdapter(Protocol):
    """
    Keyboard input abstraction.

    Implementations:
    - publish KeyboardKeyPressEvent to EventBus
    - block until cancelled
    """

    async def run(self) -> None:
        ...
