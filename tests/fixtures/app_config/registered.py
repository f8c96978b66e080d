from statekit.effects import provideEffects
from statekit.store import provideState

from app.core.store.orders.orders_feature import ordersFeature
import app.core.store.orders.orders_effects as ordersEffects


class AppConfig:
    providers = [
        provideState({"name": ordersFeature.name, "reducer": ordersFeature.reducer}),
        provideEffects([ordersEffects]),
    ]
