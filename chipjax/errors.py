"""CHIP-8 emulator exceptions."""


class Chip8Error(Exception):
    """Base exception for all emulator errors."""
    pass


class LoadError(Chip8Error):
    """ROM could not be loaded into memory."""
    pass


class RomTooLargeError(LoadError):
    """ROM does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, max_size: int, name: str = "<bytes>"):
        self.size = size
        self.max_size = max_size
        self.name = name
        super().__init__(f"ROM {name} is too big: {size} bytes, max allowed is {max_size}")


class RomUnreadableError(LoadError):
    """ROM source could not be read."""

    def __init__(self, name: str, reason: str = ""):
        self.name = name
        message = f"ROM {name} is invalid or does not exist"
        super().__init__(f"{message}: {reason}" if reason else message)


class ExecutionError(Chip8Error):
    """Fatal error while executing an instruction."""
    pass


class StackOverflowError(ExecutionError):
    """Subroutine call with a full stack."""

    def __init__(self, address: int, depth: int):
        self.address = address
        self.depth = depth
        super().__init__(f"Stack overflow calling 0x{address:03X} (depth {depth})")


class StackUnderflowError(ExecutionError):
    """Return with an empty stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with empty stack")


class AddressOutOfRangeError(ExecutionError):
    """Access outside the 4 KiB address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"Address out of range: 0x{address:04X} (+{length}) exceeds 0xFFF"
        )
