"""Site compiler - merges survey, placeholders and edits into a CompiledSite."""

from artfolio.compiler.services import (
    CompileResult,
    build_compiled_site,
    compile_site,
    load_compiled_site,
)

__all__ = ["CompileResult", "build_compiled_site", "compile_site", "load_compiled_site"]
