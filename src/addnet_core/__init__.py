from addnet_core import builder as _builder
from addnet_core import config as _config
from addnet_core import decode as _decode
from addnet_core import domains as _domains
from addnet_core import edits as _edits
from addnet_core import engine as _engine
from addnet_core import errors as _errors
from addnet_core import graph as _graph
from addnet_core import ids as _ids
from addnet_core import modes as _modes
from addnet_core import protocols as _protocols
from addnet_core import rules as _rules
from addnet_core.builder import *
from addnet_core.config import *
from addnet_core.decode import *
from addnet_core.domains import *
from addnet_core.edits import *
from addnet_core.engine import *
from addnet_core.errors import *
from addnet_core.graph import *
from addnet_core.ids import *
from addnet_core.modes import *
from addnet_core.protocols import *
from addnet_core.rules import *

__all__ = []
__all__ += _domains.__all__
__all__ += _errors.__all__
__all__ += _modes.__all__
__all__ += _protocols.__all__
__all__ += _config.__all__
__all__ += _graph.__all__
__all__ += _ids.__all__
__all__ += _builder.__all__
__all__ += _rules.__all__
__all__ += _engine.__all__
__all__ += _decode.__all__
__all__ += _edits.__all__
