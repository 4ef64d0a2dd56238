from ._call import *
from ._message import *
from ._definition import *
from ._result import *
from ._config import *
from ._request import *
from ._errors import *
from ._settings import *
from ._signature import *
