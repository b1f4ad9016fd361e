from enum import Enum
from typing import Literal
from pydantic import BaseModel


class Language(str, Enum):
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    C = "c"
    CPP = "cpp"
    RUST = "rust"
    NIX = "nix"
    GO = "go"
    ZIG = "zig"
    D = "d"
    SCALA = "scala"
    GROOVY = "groovy"
    KOTLIN = "kotlin"
    DART = "dart"
    RUBY = "ruby"
    LUA = "lua"
    JULIA = "julia"
    R = "r"
    PERL = "perl"
    CRYSTAL = "crystal"
    HASKELL = "haskell"
    ODIN = "odin"
    BRAINFUCK = "brainfuck"

    @classmethod
    def parse(cls, lang: str) -> "Language | None":
        try:
            return cls(lang)
        except ValueError:
            return None


class CompileRequest(BaseModel):
    lang: str
    content: str
    stdin: str = ""


class CompileResponse(BaseModel):
    result: str


class ErrorMessage(BaseModel):
    message: str


class HealthStatus(BaseModel):
    status: Literal["Ok"] = "Ok"
