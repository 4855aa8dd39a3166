from typing import Callable

from frothy.evaluation.special_forms.assign_form import assign_form
from frothy.evaluation.special_forms.call_form import call_form
from frothy.evaluation.special_forms.fn_form import fn_form

SpecialForm = Callable[..., None]

SPECIAL_FORMS: dict[str, SpecialForm] = {
    "fn": fn_form,
    "call": call_form,
    "=": assign_form,
}
