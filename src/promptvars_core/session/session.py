"""Variable session: owner of the authoritative state of each variable."""

from collections.abc import Callable, Iterable, Iterator, Mapping

from promptvars_core.config import PromptVarsConfig, SyncConfig
from promptvars_core.errors import create_error
from promptvars_core.logging import PromptVarsLogger
from promptvars_core.store import PromotionResult, SharedVariableStore, promote, promote_all
from promptvars_core.sync import Scheduler, VariableInput
from promptvars_core.template import ParseResult, TemplateEngine
from promptvars_core.types import TemplateVariable, ValidationError, VariableState
from promptvars_core.validation import ValidationOptions, validate


class VariableSession:
    """Holds one VariableState per template variable.

    State changes only through ``commit`` (usually driven by a bound
    VariableInput) or ``reset``. ``is_dirty`` becomes True once a committed
    value differs from the variable's default and stays True until reset.
    """

    def __init__(
        self,
        variables: Iterable[TemplateVariable],
        initial_values: Mapping[str, str] | None = None,
        options: Mapping[str, ValidationOptions] | None = None,
        default_options: ValidationOptions | None = None,
        sync_config: SyncConfig | None = None,
        template: str | None = None,
        engine: TemplateEngine | None = None,
        logger: PromptVarsLogger | None = None,
    ):
        """Initialize session.

        Args:
            variables: Parsed template variables (names must be unique)
            initial_values: Pre-filled values by name
            options: Validation options by name
            default_options: Options for variables without their own entry
            sync_config: Debounce timings for bound inputs
            template: Template text, needed for render()
            engine: Template engine used by render()
            logger: Optional logger
        """
        self._variables: dict[str, TemplateVariable] = {v.name: v for v in variables}
        self._initial_values = dict(initial_values or {})
        self._options = dict(options or {})
        self._default_options = default_options or ValidationOptions()
        self._sync_config = sync_config or SyncConfig()
        self._template = template
        self._engine = engine
        self._logger = logger
        self._inputs: dict[str, list[VariableInput]] = {}

        self._initial_states = {name: self._initial_state(name) for name in self._variables}
        self._states: dict[str, VariableState] = dict(self._initial_states)

    @classmethod
    def from_template(
        cls,
        template: str,
        engine: TemplateEngine | None = None,
        strict: bool = False,
        **kwargs,
    ) -> "VariableSession":
        """Parse a template and start a session for its variables.

        Args:
            template: Template text
            engine: Template engine (defaults to a new TemplateEngine())
            strict: Raise on template issues instead of skipping bad placeholders
            **kwargs: Passed to the constructor

        Returns:
            New VariableSession

        Raises:
            PromptVarsError(TEMPLATE_SYNTAX) when strict and the template has issues
        """
        engine = engine or TemplateEngine(logger=kwargs.get("logger"))
        parsed: ParseResult = engine.parse_strict(template) if strict else engine.parse(template)
        return cls(parsed.variables, template=template, engine=engine, **kwargs)

    @classmethod
    def from_config(
        cls,
        template: str,
        config: PromptVarsConfig,
        **kwargs,
    ) -> "VariableSession":
        """Start a session using configured defaults.

        Args:
            template: Template text
            config: Loaded configuration
            **kwargs: Passed to from_template()
        """
        kwargs.setdefault("default_options", ValidationOptions.from_config(config.validation))
        kwargs.setdefault("sync_config", config.sync)
        if "engine" not in kwargs:
            kwargs["engine"] = TemplateEngine.from_config(
                config.template_cache, logger=kwargs.get("logger")
            )
        return cls.from_template(template, **kwargs)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    @property
    def variables(self) -> list[TemplateVariable]:
        return list(self._variables.values())

    def variable(self, name: str) -> TemplateVariable:
        """Look up a variable.

        Raises:
            PromptVarsError(VARIABLE_NOT_FOUND)
        """
        try:
            return self._variables[name]
        except KeyError:
            raise create_error("VARIABLE_NOT_FOUND", variable_name=name) from None

    def options_for(self, name: str) -> ValidationOptions:
        """Validation options in effect for a variable."""
        self.variable(name)
        return self._options.get(name, self._default_options)

    def state(self, name: str) -> VariableState:
        """Current state of a variable.

        Raises:
            PromptVarsError(VARIABLE_NOT_FOUND)
        """
        self.variable(name)
        return self._states[name]

    @property
    def states(self) -> dict[str, VariableState]:
        """Copy of all states in template order."""
        return dict(self._states)

    @property
    def values(self) -> dict[str, str]:
        """Committed value per variable."""
        return {name: state.value for name, state in self._states.items()}

    @property
    def dirty_names(self) -> list[str]:
        return [name for name, state in self._states.items() if state.is_dirty]

    @property
    def validation_errors(self) -> list[ValidationError]:
        """All errors, grouped by variable in template order."""
        return [error for state in self._states.values() for error in state.errors]

    @property
    def has_all_required_values(self) -> bool:
        """True when no variable has a validation error."""
        return not self.validation_errors

    def commit(self, name: str, value: str) -> VariableState:
        """Validate a value and make it the authoritative state.

        Args:
            name: Variable name
            value: Committed value

        Returns:
            The new VariableState

        Raises:
            PromptVarsError(VARIABLE_NOT_FOUND)
        """
        variable = self.variable(name)
        previous = self._states[name]
        outcome = validate(variable, value, self.options_for(name))
        state = VariableState(
            value=value,
            is_valid=outcome.is_valid,
            is_dirty=previous.is_dirty or value != self._baseline(variable),
            errors=outcome.errors,
        )
        self._states[name] = state
        return state

    def reset(self, name: str | None = None) -> None:
        """Restore initial state for one variable or all of them.

        Bound inputs drop pending edits and adopt the restored value.

        Args:
            name: Variable to reset (None resets every variable)
        """
        names = [name] if name is not None else list(self._variables)
        for current in names:
            self.variable(current)
            self._states[current] = self._initial_states[current]
            for bound in self._inputs.get(current, []):
                bound.sync_from_owner()

    def bind_input(
        self,
        name: str,
        scheduler: Scheduler,
        on_pending: Callable[[], None] | None = None,
        on_complete: Callable[[], None] | None = None,
        delay_ms: float | None = None,
        max_wait_ms: float | None = None,
    ) -> VariableInput:
        """Create a debounced input whose commits flow into this session.

        Args:
            name: Variable name
            scheduler: Timer source
            on_pending: Advisory hook for the Typing state
            on_complete: Advisory hook after each commit
            delay_ms: Quiet period (defaults to sync config)
            max_wait_ms: Ceiling (defaults to sync config)

        Returns:
            VariableInput; dispose it when the input goes away
        """
        variable = self.variable(name)
        bound = VariableInput(
            variable,
            state=lambda: self._states[name],
            on_change=lambda value: self.commit(name, value),
            scheduler=scheduler,
            options=self.options_for(name),
            delay_ms=self._sync_config.delay_ms if delay_ms is None else delay_ms,
            max_wait_ms=self._sync_config.max_wait_ms if max_wait_ms is None else max_wait_ms,
            on_pending=on_pending,
            on_complete=on_complete,
            logger=self._logger,
        )
        inputs = self._inputs.setdefault(name, [])
        # Forget inputs that were disposed since the last bind
        inputs[:] = [existing for existing in inputs if not existing.disposed]
        inputs.append(bound)
        return bound

    def dispose_inputs(self) -> None:
        """Dispose every bound input."""
        for inputs in self._inputs.values():
            for bound in inputs:
                bound.dispose()
        self._inputs.clear()

    def promote(self, name: str, store: SharedVariableStore) -> PromotionResult:
        """Promote one variable to the shared store (see store.promote)."""
        return promote(self, name, store, self._logger)

    def promote_all(self, store: SharedVariableStore) -> dict[str, PromotionResult]:
        """Promote every dirty, valid variable whose value differs from the shared store."""
        return promote_all(self, store, self._logger)

    def render(self, shared: SharedVariableStore | None = None) -> str:
        """Fill the template with committed values.

        Args:
            shared: Optional shared store consulted for blank values

        Returns:
            Rendered text

        Raises:
            PromptVarsError(TEMPLATE_UNRESOLVED) if a required value is missing
        """
        if self._template is None:
            raise create_error("TEMPLATE_SYNTAX", issue_count=0, detail="Session has no template")
        engine = self._engine or TemplateEngine()
        return engine.render(self._template, self.values, shared)

    def _baseline(self, variable: TemplateVariable) -> str:
        return variable.default_value or ""

    def _initial_state(self, name: str) -> VariableState:
        variable = self._variables[name]
        baseline = self._baseline(variable)
        value = self._initial_values.get(name, baseline)
        outcome = validate(variable, value, self._options.get(name, self._default_options))
        return VariableState(
            value=value,
            is_valid=outcome.is_valid,
            is_dirty=value != baseline,
            errors=outcome.errors,
        )
