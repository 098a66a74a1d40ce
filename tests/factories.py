from app.schemas.status.status_config_schemas import StatusConfig


def make_status(name: str, category: str = "order", order: int = 1, **fields) -> StatusConfig:
    """Build a StatusConfig with sensible defaults; `fields` use snake_case."""
    return StatusConfig(
        id=fields.pop("id", name),
        name=name,
        label=fields.pop("label", name.title()),
        category=category,
        order=order,
        **fields,
    )
