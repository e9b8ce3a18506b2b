"""soqlgen - Translate Object.method(...) query expressions into SOQL."""

from soqlgen.query_language import (
    CompiledQuery,
    QueryLanguageError,
    compile_query_text,
    format_error,
    translate,
)


__version__ = "0.1.0"

__all__ = [
    "CompiledQuery",
    "QueryLanguageError",
    "__version__",
    "compile_query_text",
    "format_error",
    "translate",
]
