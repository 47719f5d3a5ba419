"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidArgumentError(DomainException):
    """Caller supplied a structurally invalid input (bad count, non-positive amount, wrong animal)"""

    pass


class RecordNotFoundError(DomainException):
    """Referenced animal, cycle, vaccine, transaction or installment does not exist"""

    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class PersistenceFailureError(DomainException):
    """A step of a multi-record write failed at the storage boundary; nothing was kept"""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")
