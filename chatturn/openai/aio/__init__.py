from .._common import *
from ._function import *
from ._group import *
from ._transport import *
from ._chat import *
