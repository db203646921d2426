# This file makes the 'commands' directory a Python package
# Importing command modules from here

from . import init
from . import clone
from . import add
from . import commit
from . import log
from . import status
from . import config
from . import branch
from . import checkout
from . import switch
from . import diff
from . import merge
from . import rebase
from . import reset
from . import restore
from . import revert
from . import cherry_pick
from . import stash
from . import clean
from . import rm
from . import mv
from . import tag
from . import remote
from . import fetch
from . import pull
from . import push
from . import about
from . import table
