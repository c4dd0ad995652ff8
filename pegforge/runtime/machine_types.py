"""Static typing support, appended to the runtime in typed mode.

Regex terminals with an enumerable set of matches are wrapped in
`cast(Parser[Literal[...]], ...)`; rule functions take `state: ParseState`.
"""

from typing import Literal, Optional, Protocol, TypeVar, cast

T_co = TypeVar("T_co", covariant=True)


class Parser(Protocol[T_co]):
    def __call__(self, state: ParseState) -> Optional[Result]: ...
