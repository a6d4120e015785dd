"""Import builtin tool modules to declare them via @register_tool.

Import order is the order tools are listed to clients.
"""
from . import calculator
from . import echo
from . import clock
from . import uuid_gen
from . import weather
from . import datasets
from . import places
from . import meteo
from . import traffic
from . import sentiment
