class ValidationException(Exception):
    """Raised when a converted feature cannot be represented in the Augurk model,
    for instance an example set whose rows do not match its columns.

    Attributes:
        field_name: model field that was rejected
        class_name: model class the field belongs to
        reason: what is wrong with the value
    """

    def __init__(self, field_name: str, class_name: str, reason: str = ""):
        self.field_name = field_name
        self.class_name = class_name
        self.reason = reason
        super().__init__(f"Invalid {field_name} in {class_name}. {reason}".strip())
