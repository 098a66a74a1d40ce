from sqlalchemy.ext.asyncio import AsyncSession
from app.models.support.activity_models import WorkflowActivity
from app.constants.activity_templates import ACTIVITY_TEMPLATES
from app.constants.activity_codes import ActivityCode

SYSTEM_ACTOR = "system"


async def emit_activity(
    db: AsyncSession,
    *,
    actor: str | None,
    code: ActivityCode,
    **context,
):
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    actor = actor or SYSTEM_ACTOR

    try:
        message = template.format(actor=actor, **context)
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        WorkflowActivity(
            actor_snapshot=actor,
            message=message,
        )
    )
