from dataclasses import dataclass
from pathlib import Path

from core.errors import (
    CompileError,
    CompileOrRunError,
    DecodeError,
    SignalError,
    UnsupportedLanguageError,
)
from core.logging import get_logger
from sandbox.runner import ProcessResult, run_process
from sandbox.scratch import Scratch
from sandbox.strategies import Artifact, Strategy, get_strategy
from sandbox.tools import resolve_tools
from schemas.code import Language

logger = get_logger(__name__)


@dataclass(frozen=True)
class Submission:
    language: Language
    source: bytes
    stdin: bytes = b""


def _stderr_text(result: ProcessResult) -> str:
    return result.stderr.decode("utf-8", errors="replace")


def _check_compile(strategy: Strategy, result: ProcessResult) -> None:
    if result.success:
        return
    stderr = _stderr_text(result)
    if result.exit_code is None:
        raise SignalError(
            f"{strategy.name} compiler terminated by signal\nError: {stderr}"
        )
    if strategy.compile_reports_stdout:
        stdout = result.stdout.decode("utf-8", errors="replace")
        raise CompileError(
            f"{strategy.name} compilation failed:\nSTDOUT: {stdout}\nSTDERR: {stderr}"
        )
    raise CompileError(f"{strategy.name} compilation failed:\n{stderr}")


def _check_run(strategy: Strategy, result: ProcessResult) -> str:
    stderr = _stderr_text(result)
    if result.exit_code is None:
        raise SignalError(f"{strategy.subject} terminated by signal\nError: {stderr}")
    if result.exit_code != 0:
        # compile and run errors of a one-step toolchain cannot be told apart
        error = CompileOrRunError if strategy.single_command else strategy.run_failure
        raise error(
            f"{strategy.failed_action} failed with status code: "
            f"{result.exit_code}\nError: {stderr}"
        )

    if stderr:
        logger.debug("Discarding stderr of successful run: %s", stderr)
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(str(e)) from e


def _allocate_artifact(
    strategy: Strategy, scratch: Scratch, source: Path, workdir: Path | None
) -> Path | None:
    if strategy.artifact is Artifact.EXECUTABLE:
        return scratch.artifact_path()
    if strategy.artifact is Artifact.DIRECTORY:
        return scratch.temp_dir()
    if strategy.artifact is Artifact.DERIVED:
        # the compiler writes it next to its cwd, which is the private work dir
        return scratch.track(workdir / source.stem)
    return None


async def run_submission(submission: Submission) -> str:
    """
    Run one submission to completion and return its stdout.

    Tools are resolved before anything touches the filesystem. All scratch
    paths are removed on the way out, whatever the outcome.
    """
    strategy = get_strategy(submission.language)
    logger.debug("Received %s submission", submission.language.value)

    tools = resolve_tools(strategy.tools)
    logger.debug("Resolved tools %s", tools)

    async with Scratch() as scratch:
        workdir = scratch.temp_dir() if strategy.work_dir_required else None
        source = await scratch.write_file(
            strategy.source_suffix,
            strategy.source_preamble + submission.source,
            dir=workdir,
            name=strategy.source_name,
        )
        artifact = _allocate_artifact(strategy, scratch, source, workdir)
        paths = {"source": source, "artifact": artifact, "workdir": workdir}
        logger.debug("Materialized source at %s", source)

        if strategy.compile_step is not None:
            result = await run_process(
                strategy.compile_argv(tools, paths), b"", cwd=workdir
            )
            _check_compile(strategy, result)
            logger.debug("Compiled %s", source)

        result = await run_process(
            strategy.run_argv(tools, paths), submission.stdin, cwd=workdir
        )
        return _check_run(strategy, result)


async def execute_code(lang: str, content: str, stdin: str = "") -> str:
    """Entry point for the HTTP layer: validate the tag, then dispatch."""
    language = Language.parse(lang)
    if language is None:
        raise UnsupportedLanguageError(lang)

    submission = Submission(
        language=language,
        source=content.encode("utf-8"),
        stdin=stdin.encode("utf-8"),
    )
    return await run_submission(submission)
