# app/models/enums/payment_rules.py
import enum

class PaymentType(str, enum.Enum):
    prepaid = "prepaid"
    cod = "cod"
    partial = "partial"
    mixed = "mixed"


class PaymentRequiredBefore(str, enum.Enum):
    never = "never"
    processing = "processing"
    shipping = "shipping"
    completion = "completion"


class PaymentValidationRule(str, enum.Enum):
    none = "none"
    standard = "standard"
    strict = "strict"
    automatic = "automatic"
