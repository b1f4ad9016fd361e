from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from core.errors import CompileError, ExecutionError, RunError
from schemas.code import Language


class Artifact(Enum):
    NONE = "none"
    # a fresh executable path the compiler writes to
    EXECUTABLE = "executable"
    # a class output directory for JVM toolchains
    DIRECTORY = "directory"
    # an executable the compiler names after the source, in its cwd
    DERIVED = "derived"


@dataclass(frozen=True)
class Step:
    """
    One toolchain invocation. `tool` is looked up on PATH; None runs the
    compiled artifact itself. Arguments may use {source}, {artifact} and
    {workdir}.
    """

    tool: str | None
    args: tuple[str, ...] = ()

    def argv(self, tools: dict[str, Path], paths: dict[str, Path | None]) -> list[str]:
        if self.tool is None:
            program = str(paths["artifact"])
        else:
            program = str(tools[self.tool])
        return [program] + [arg.format(**paths) for arg in self.args]


@dataclass(frozen=True)
class Strategy:
    name: str
    source_suffix: str
    run_step: Step
    compile_step: Step | None = None
    source_preamble: bytes = b""
    # fixed basename for the source inside the work dir
    source_name: str | None = None
    artifact: Artifact = Artifact.NONE
    work_dir_required: bool = False
    single_command: bool = False
    # flag asking the tool to print its result unquoted
    raw_output_flag: str | None = None
    run_failure: type[ExecutionError] = RunError
    subject: str = ""
    # what "... failed with status code" reports, "<subject> execution" by default
    failed_action: str = ""
    compile_reports_stdout: bool = False
    tools: tuple[str, ...] = field(init=False)

    def __post_init__(self):
        steps = [self.compile_step, self.run_step]
        names = tuple(s.tool for s in steps if s is not None and s.tool is not None)
        object.__setattr__(self, "tools", names)
        if not self.subject:
            object.__setattr__(self, "subject", f"{self.name} program")
        if not self.failed_action:
            object.__setattr__(self, "failed_action", f"{self.subject} execution")

    def compile_argv(self, tools, paths) -> list[str]:
        return self.compile_step.argv(tools, paths)

    def run_argv(self, tools, paths) -> list[str]:
        argv = self.run_step.argv(tools, paths)
        if self.raw_output_flag:
            argv.append(self.raw_output_flag)
        return argv


def interpreted(name: str, tool: str, suffix: str, **kwargs) -> Strategy:
    return Strategy(
        name=name,
        source_suffix=suffix,
        run_step=Step(tool, ("{source}",)),
        **kwargs,
    )


def compiled(name: str, compile_step: Step, suffix: str, **kwargs) -> Strategy:
    return Strategy(
        name=name,
        source_suffix=suffix,
        compile_step=compile_step,
        run_step=Step(None),
        artifact=Artifact.EXECUTABLE,
        **kwargs,
    )


def single_command(name: str, run_step: Step, suffix: str, **kwargs) -> Strategy:
    return Strategy(
        name=name,
        source_suffix=suffix,
        run_step=run_step,
        single_command=True,
        **kwargs,
    )


JAVASCRIPT = interpreted("JavaScript", "bun", ".js")

STRATEGIES: dict[Language, Strategy] = {
    Language.PYTHON: interpreted(
        "Python",
        "python3",
        ".py",
        subject="Python process",
        failed_action="Python execution",
    ),
    Language.JAVASCRIPT: JAVASCRIPT,
    Language.TYPESCRIPT: JAVASCRIPT,
    Language.RUBY: interpreted("Ruby", "ruby", ".rb"),
    Language.LUA: interpreted("Lua", "lua", ".lua"),
    Language.JULIA: interpreted("Julia", "julia", ".jl"),
    Language.R: interpreted("R", "Rscript", ".R"),
    Language.PERL: interpreted("Perl", "perl", ".pl"),
    Language.NIX: Strategy(
        name="Nix",
        source_suffix=".nix",
        run_step=Step("nix", ("eval", "--file", "{source}")),
        raw_output_flag="--raw",
        run_failure=CompileError,
        subject="Nix evaluation",
        failed_action="Nix evaluation",
    ),
    Language.C: compiled(
        "C", Step("zig", ("cc", "{source}", "-o", "{artifact}")), ".c"
    ),
    Language.CPP: compiled(
        "C++", Step("clang++", ("{source}", "-o", "{artifact}")), ".cpp"
    ),
    Language.RUST: compiled(
        "Rust",
        Step("rustc", ("{source}", "--crate-name", "temp", "-o", "{artifact}")),
        ".rs",
    ),
    Language.CRYSTAL: compiled(
        "Crystal", Step("crystal", ("build", "{source}", "-o", "{artifact}")), ".cr"
    ),
    Language.HASKELL: compiled(
        "Haskell", Step("ghc", ("-o", "{artifact}", "{source}")), ".hs"
    ),
    Language.DART: compiled(
        "Dart",
        Step("dart", ("compile", "exe", "{source}", "-o", "{artifact}")),
        ".dart",
    ),
    Language.BRAINFUCK: Strategy(
        name="Brainfuck",
        source_suffix=".bf",
        compile_step=Step("bfc", ("{source}",)),
        run_step=Step(None),
        artifact=Artifact.DERIVED,
        work_dir_required=True,
        compile_reports_stdout=True,
    ),
    Language.SCALA: Strategy(
        name="Scala",
        source_suffix=".scala",
        compile_step=Step("scalac", ("{source}", "-d", "{artifact}")),
        run_step=Step("scala", ("-cp", "{artifact}", "Main")),
        artifact=Artifact.DIRECTORY,
    ),
    Language.GROOVY: Strategy(
        name="Groovy",
        source_suffix=".groovy",
        compile_step=Step(
            "groovyc", ("{source}", "--classpath", "{artifact}", "-d", "{artifact}")
        ),
        run_step=Step("groovy", ("-cp", "{artifact}", "{source}")),
        artifact=Artifact.DIRECTORY,
    ),
    Language.KOTLIN: Strategy(
        name="Kotlin",
        source_suffix=".kt",
        compile_step=Step("kotlinc", ("{source}", "-d", "{artifact}")),
        run_step=Step("kotlin", ("-cp", "{artifact}", "MainKt")),
        artifact=Artifact.DIRECTORY,
        # kotlinc names the class after the file
        source_name="Main.kt",
        work_dir_required=True,
    ),
    Language.GO: single_command(
        "Go",
        Step("go", ("run", "{source}")),
        ".go",
        source_name="program.go",
        work_dir_required=True,
    ),
    Language.D: single_command(
        "D",
        Step("dmd", ("-run", "{source}")),
        ".d",
        source_preamble=b"module temp;\n",
    ),
    Language.ZIG: single_command("Zig", Step("zig", ("run", "{source}")), ".zig"),
    Language.ODIN: single_command(
        "Odin", Step("odin", ("run", "{source}", "-file")), ".odin"
    ),
}

_missing = set(Language) - set(STRATEGIES)
if _missing:
    names = sorted(m.value for m in _missing)
    raise RuntimeError(f"languages without a strategy: {names}")


def get_strategy(language: Language) -> Strategy:
    return STRATEGIES[language]
