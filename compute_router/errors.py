"""Exceptions raised by compute-router."""


class RouterError(Exception):
    """Base class for compute-router errors."""


class ValidationError(RouterError, ValueError):
    """A context failed construction-boundary validation.

    ``problems`` lists every defect found, not just the first.
    """

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Invalid context: " + "; ".join(self.problems))


class TemplateError(RouterError):
    """A narrative template is malformed."""


class TemplateNotFoundError(TemplateError, FileNotFoundError):
    """No template file exists for the requested modality/language."""


class StepNotFoundError(RouterError, KeyError):
    """A workflow step is absent from the narrative template."""

    def __init__(self, step: str, modality: str):
        self.step = step
        self.modality = modality
        super().__init__(step)

    def __str__(self) -> str:
        return f'Step "{self.step}" not found in template for modality "{self.modality}"'
