from django.core.validators import RegexValidator

phone_validator = RegexValidator(
    regex=r"^[0-9+\-\s()]+$",
    message="Invalid phone number format",
)
