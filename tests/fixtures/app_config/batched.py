"""Application configuration."""

from statekit.config import ApplicationConfig
from statekit.effects import provideEffects
from statekit.store import provideStore

import app.core.store.users.users_effects as usersEffects
import app.core.store.products.products_effects as productsEffects

app_config = ApplicationConfig(
    providers=[
        provideStore(),
        provideEffects([usersEffects, productsEffects]),
    ],
)
