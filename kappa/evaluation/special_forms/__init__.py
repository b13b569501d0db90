"""Evaluation rules for the control and binding forms.

Each handler takes the node, the current environment and the evaluator
function to recurse with. `define` and `begin` also return the environment
that is in effect afterwards, since a definition extends the scope for the
forms that follow it.
"""

from kappa.evaluation.special_forms.binding_forms import define_form, let_form, letrec_form, set_form
from kappa.evaluation.special_forms.logic_forms import and_form, cond_form, if_form, or_form
from kappa.evaluation.special_forms.progn_form import begin_form
from kappa.evaluation.special_forms.quote_forms import quote_form, reify

__all__ = [
    "define_form",
    "let_form",
    "letrec_form",
    "set_form",
    "and_form",
    "or_form",
    "if_form",
    "cond_form",
    "begin_form",
    "quote_form",
    "reify",
]
