# File generated from its async equivalent, chatturn/openai/aio/__init__.py
from .._common import *
from ._function import *
from ._group import *
from ._transport import *
from ._chat import *
