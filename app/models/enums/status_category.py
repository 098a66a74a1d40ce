# app/models/enums/status_category.py
import enum

class StatusCategory(str, enum.Enum):
    quote = "quote"
    order = "order"


# system_settings.setting_key per category
SETTING_KEYS = {
    StatusCategory.quote: "quote_statuses",
    StatusCategory.order: "order_statuses",
}
