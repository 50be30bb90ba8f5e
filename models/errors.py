class MedicationError(Exception):
    """Base class for recoverable input errors surfaced to the UI."""


class ValidationError(MedicationError):
    pass


class NotFoundError(MedicationError):
    def __init__(self, medication_id):
        super().__init__(f"Medication {medication_id} not found")
        self.medication_id = medication_id
