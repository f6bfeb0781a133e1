# Core type aliases for ArchScript's data model.
# Every parsed node is also a runtime value: the reader builds instances of
# archscript.types.value.Value subclasses and the evaluator returns them.
#
# Naming guidance:
# - Form:      Use in reader/parser code to denote syntactic nodes (code-as-data).
# - ArchValue: Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` so annotations stay cheap and import-cycle free.

from typing import Any, Callable, Optional

__version__ = "0.3.0"

# Runtime value alias
ArchValue = Any
# Forms and values are the same objects; the alias documents intent only
Form = ArchValue

# Parser continuation callback: receives the partial source read so far and
# returns more text, or "" / None when the collaborator has nothing left.
MoreInputFn = Callable[[str], Optional[str]]
