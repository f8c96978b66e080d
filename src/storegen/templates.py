"""Source templates for a new state-management feature.

Each render_* function returns the full text of one generated module.
"""

from storegen.config import DEFAULT_CONFIG, StoregenConfig
from storegen.naming import capitalize


def render_model(name: str, config: StoregenConfig = DEFAULT_CONFIG) -> str:
    cap = capitalize(name)
    return f'''"""{cap} model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class {cap}:
    id: str | int
    name: str
    description: str
'''


def render_actions(name: str, config: StoregenConfig = DEFAULT_CONFIG) -> str:
    cap = capitalize(name)
    return f'''"""{cap} actions."""

from {config.state_module} import create_action_group, empty_props, props

from {config.model_module(name)} import {cap}

{name}Actions = create_action_group(
    source="{cap}",
    events={{
        "Load {cap}": empty_props(),
        "Load {cap} Success": props(items=list[{cap}]),
        "Load {cap} Failure": empty_props(),
    }},
)
'''


def render_effects(name: str, config: StoregenConfig = DEFAULT_CONFIG) -> str:
    cap = capitalize(name)
    return f'''"""{cap} effects."""

from {config.effects_module} import Actions, create_effect, of_type

from {config.actions_module(name)} import {name}Actions


@create_effect
def {name}LoadEffects(actions: Actions):
    return actions.pipe(
        of_type({name}Actions.load{cap}),
        lambda _: {name}Actions.load{cap}Success(items=[]),
    )
'''


def render_feature(name: str, config: StoregenConfig = DEFAULT_CONFIG) -> str:
    cap = capitalize(name)
    return f'''"""{cap} state slice."""

from dataclasses import dataclass, field, replace

from {config.state_module} import create_feature, create_reducer, on

from {config.actions_module(name)} import {name}Actions
from {config.model_module(name)} import {cap}


@dataclass(frozen=True)
class {cap}State:
    items: list[{cap}] = field(default_factory=list)
    error: bool = False
    pending: bool = False


INITIAL_STATE = {cap}State()

{name}Feature = create_feature(
    name="{name}",
    reducer=create_reducer(
        INITIAL_STATE,
        on({name}Actions.load{cap}, lambda state, action: replace(state, error=False, pending=True)),
        on(
            {name}Actions.load{cap}Success,
            lambda state, action: replace(state, items=action.items, error=False, pending=False),
        ),
        on({name}Actions.load{cap}Failure, lambda state, action: replace(state, error=True, pending=False)),
    ),
)

select_error = {name}Feature.select_error
select_items = {name}Feature.select_items
select_pending = {name}Feature.select_pending
'''
