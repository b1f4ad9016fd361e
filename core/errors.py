class ExecutionError(Exception):
    """Base class for every failure a submission can end in."""

    kind: str = "execution"
    prefix: str = "Execution error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class UnsupportedLanguageError(ExecutionError):
    kind = "unsupported_language"
    prefix = "Language not supported"

    def __init__(self, lang: str):
        super().__init__(f"{lang} language is not supported")
        self.lang = lang


class ToolMissingError(ExecutionError):
    kind = "tool_missing"
    prefix = "Failed to find the binary"

    def __init__(self, tool: str):
        super().__init__(tool)
        self.tool = tool


class ScratchIoError(ExecutionError):
    kind = "io"
    prefix = "IO error"


class CompileError(ExecutionError):
    kind = "compile"
    prefix = "Compilation failed"


class RunError(ExecutionError):
    kind = "run"
    prefix = "Execution failed"


class SignalError(ExecutionError):
    kind = "signal"
    prefix = "Terminated by signal"


class DecodeError(ExecutionError):
    kind = "decode"
    prefix = "Failed to convert string"


class CompileOrRunError(ExecutionError):
    kind = "compile_or_run"
    prefix = "Compilation or execution failed"


class ExecutionTimeoutError(ExecutionError):
    kind = "timeout"
    prefix = "Execution timed out"

    def __init__(self, seconds: float):
        super().__init__(f"after {seconds:g} seconds")
        self.seconds = seconds

    def __str__(self) -> str:
        return f"{self.prefix} {self.detail}"
