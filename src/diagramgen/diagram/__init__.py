# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The scene graph shared by all layouts, plus colors and themes.

Layout algorithms produce immutable :class:`Scene` objects, which can
then be presented as SVG or serialized to JSON.
"""
# isort: off
from ._vector2d import *

from .capstyle import *
from ._scene import *
from ._json_enc import *

import typing as t

if not t.TYPE_CHECKING:
    from ._vector2d import __all__ as _all1
    from .capstyle import __all__ as _all2
    from ._scene import __all__ as _all3
    from ._json_enc import __all__ as _all4

    __all__ = [*_all1, *_all2, *_all3, *_all4]

    del _all1, _all2, _all3, _all4
del t
