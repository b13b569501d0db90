# Core type alias for Kappa's data model.
#
# Naming guidance:
# - Value: an evaluated runtime value (kappa.types.values / singletons).
#   It resolves to `Any` so that modules can annotate without importing the
#   concrete variant classes (and without creating import cycles).
# - Syntax nodes from the reader are typed by kappa.types.syntax.Syntax.

import logging
from typing import Any

Value = Any

logging.getLogger(__name__).addHandler(logging.NullHandler())
