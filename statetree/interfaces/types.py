# statetree/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Dict, NamedTuple, Optional

StateName = str
ActionName = str
EventName = str


class Declaration(NamedTuple):
    parent: Optional[StateName]
    child: StateName
    is_default: bool = False


# Callback Types
Handler = Callable[..., Any]
Context = Dict[ActionName, Handler]
Subscriber = Callable[..., Any]
Navigate = Callable[[str], None]
