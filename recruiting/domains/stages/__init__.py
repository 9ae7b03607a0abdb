"""Stage engine domain.

Applies stage transitions to single application records and defines the
contract the record store must honour when persisting them.
"""

from recruiting.domains.stages.models import (
    Application,
    ApplicationStatus,
    FUNNEL_STAGES,
    STAGE_ORDER,
    Stage,
    new_application,
    parse_stage,
)
from recruiting.domains.stages.engine import STATUS_BY_STAGE, is_terminal, status_for, transition
from recruiting.domains.stages.store import ApplicationStore, InMemoryApplicationStore, move_application
