"""
mal.repl - Read-print loop with pluggable frontends

The backend runs READ -> EVAL -> PRINT on one line at a time. Lines are
independent: a failed read leaves nothing behind for the next one.
EVAL is the identity at this stage, so the loop echoes each form back in
canonical form.

Frontends:
- SimpleRepl: input()/print() loop with injectable read and write functions
- TerminalRepl: SimpleRepl plus readline line editing and a history file
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from mal.printer import pr_str
from mal.reader import read_str, tokenize
from mal.types import ReadError

DEFAULT_PROMPT = "user> "
DEFAULT_HISTORY_FILE = ".mal_history"


@dataclass
class ReplConfig:
    """Settings for a REPL session, normally filled in from the command line."""

    prompt: str = DEFAULT_PROMPT
    history_file: str = DEFAULT_HISTORY_FILE
    use_history: bool = True
    log_file: Optional[str] = None


# =============================================================================
# READ / EVAL / PRINT
# =============================================================================


def READ(src: str):
    return read_str(src)


def EVAL(ast):
    return ast


def PRINT(exp) -> str:
    return pr_str(exp)


def rep(src: str) -> str:
    return PRINT(EVAL(READ(src)))


# =============================================================================
# Backend
# =============================================================================


class ResultType(Enum):
    """Type of result returned from evaluation."""

    VALUE = "value"
    ERROR = "error"
    EMPTY = "empty"


@dataclass
class EvalResult:
    """Result of evaluating one line."""

    type: ResultType
    value: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def is_error(self) -> bool:
        return self.type == ResultType.ERROR


@dataclass
class ReplState:
    """Maintains the state of a REPL session."""

    history: list[tuple[str, EvalResult]] = field(default_factory=list)

    def add_to_history(self, line: str, result: EvalResult):
        """Add an evaluation to the history."""
        self.history.append((line, result))


class ReplBackend:
    """
    Frontend-agnostic evaluation logic.

    If log_path is given, every evaluated line and every error is appended
    to that file.
    """

    def __init__(self, state: Optional[ReplState] = None, log_path: Optional[str] = None):
        self.state = state or ReplState()
        self.log_file: Any = open(log_path, "a", encoding="utf-8") if log_path else None

    def _log(self, message: str) -> None:
        """Write a message to the log file if configured."""
        if self.log_file:
            self.log_file.write(f"{message}\n")
            self.log_file.flush()

    def eval(self, line: str) -> EvalResult:
        """
        Read, evaluate and print one line.

        Args:
            line: The source text to evaluate.

        Returns:
            An EvalResult holding the printed form or the read error.
        """
        if next(tokenize(line), None) is None:
            return EvalResult(type=ResultType.EMPTY)

        try:
            output = rep(line)
        except ReadError as e:
            self._log(f"Read error: {type(e).__name__}: {e} (input: {line!r})")
            result = EvalResult(
                type=ResultType.ERROR,
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            self._log(f"Evaluated: {line!r} -> {output!r}")
            result = EvalResult(type=ResultType.VALUE, value=output)

        self.state.add_to_history(line, result)
        return result

    def close(self):
        if self.log_file:
            self.log_file.close()
            self.log_file = None


# =============================================================================
# Frontends
# =============================================================================


class ReplFrontend(ABC):
    """
    Abstract base class for REPL frontends.

    Subclasses should implement the run method to provide
    specific input/output behavior.
    """

    def __init__(self, backend: Optional[ReplBackend] = None):
        self.backend = backend or ReplBackend()

    @abstractmethod
    def run(self):
        """Run the REPL frontend."""
        pass


class SimpleRepl(ReplFrontend):
    """
    Minimal REPL frontend without readline support.
    Useful for piped input, embedding and tests.
    """

    def __init__(
        self,
        backend: Optional[ReplBackend] = None,
        prompt: str = DEFAULT_PROMPT,
        readfunc: Optional[Callable[[str], str]] = None,
        writefunc: Optional[Callable[[str], Any]] = None,
    ):
        """
        Initialize the simple REPL.

        Args:
            backend: Optional ReplBackend to use.
            prompt: The prompt string.
            readfunc: Writes a prompt and reads a line (like input).
            writefunc: Writes the given text (like a file object's write).
        """
        super().__init__(backend)
        self.prompt = prompt
        self.readfunc = readfunc or input
        self.writefunc = writefunc or sys.stdout.write

    def print_result(self, result: EvalResult):
        """Print an evaluation result."""
        if result.is_error():
            self.writefunc(f"{result.error}\n")
        elif result.type == ResultType.VALUE:
            self.writefunc(f"{result.value}\n")

    def after_line(self):
        """Called after each line has been evaluated and printed."""
        pass

    def run(self):
        """Run the loop until end of input."""
        try:
            while True:
                try:
                    line = self.readfunc(self.prompt)
                except EOFError:
                    self.writefunc("\n")
                    break
                except KeyboardInterrupt:
                    self.writefunc("\n")
                    continue

                result = self.backend.eval(line)
                self.print_result(result)
                self.after_line()
        finally:
            self.backend.close()


class TerminalRepl(SimpleRepl):
    """
    Terminal-based REPL frontend with readline support.
    """

    def __init__(
        self,
        backend: Optional[ReplBackend] = None,
        config: Optional[ReplConfig] = None,
    ):
        self.config = config or ReplConfig()
        if backend is None:
            backend = ReplBackend(log_path=self.config.log_file)
        super().__init__(backend, prompt=self.config.prompt)
        self.setup_readline()

    def setup_readline(self):
        """Setup readline for line editing and persisted history."""
        try:
            import readline

            self.readline = readline
        except ImportError:
            self.readline = None
            return

        if not self.config.use_history:
            return

        try:
            readline.read_history_file(self.config.history_file)
        except FileNotFoundError:
            print("No previous history.")
        except OSError as e:
            print(f"Error reading history: {e}", file=sys.stderr)

    def save_history(self):
        if self.readline is None or not self.config.use_history:
            return
        try:
            self.readline.write_history_file(self.config.history_file)
        except OSError as e:
            print(f"Error saving history: {e}", file=sys.stderr)

    def after_line(self):
        self.save_history()


def create_repl(mode: str = "terminal", **kwargs) -> ReplFrontend:
    """
    Factory function to create a REPL frontend.

    Args:
        mode: The mode of REPL to create ("terminal" or "simple").
        **kwargs: Additional arguments to pass to the frontend.

    Returns:
        A ReplFrontend instance.
    """
    if mode == "terminal":
        return TerminalRepl(**kwargs)
    elif mode == "simple":
        return SimpleRepl(**kwargs)
    else:
        raise ValueError(f"Unknown REPL mode: {mode}")


__all__ = [
    "ReplConfig",
    "READ",
    "EVAL",
    "PRINT",
    "rep",
    "ResultType",
    "EvalResult",
    "ReplState",
    "ReplBackend",
    "ReplFrontend",
    "SimpleRepl",
    "TerminalRepl",
    "create_repl",
]
