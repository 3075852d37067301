"""Dynamic values for a text template engine.

Wraps python objects of any type so template expressions, filters and
tags can classify, coerce, compare and iterate them uniformly.
"""

__version__ = "0.1.0"


from ._error import *
from ._kind import *
from ._diag import *
from ._numparse import *
from ._order import *
from ._iterate import *
from ._value import *
