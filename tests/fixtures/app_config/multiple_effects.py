from statekit.effects import provideEffects
from statekit.store import provideState

import app.core.store.users.users_effects as usersEffects
import app.core.store.audit.audit_effects as auditEffects

providers = [provideEffects(usersEffects), provideEffects(auditEffects)]
