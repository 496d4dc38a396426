from enum import Enum


class Role(str, Enum):
    patient = "patient"
    provider = "provider"


# fields a user may change on their own profile, per role
PATIENT_FIELDS = ("name", "age", "gender", "health_conditions")
PROVIDER_FIELDS = ("name", "specialization", "years_of_experience", "bio")

# all of these must be truthy before a profile counts as complete
REQUIRED_FIELDS = {
    Role.patient: ("age", "gender"),
    Role.provider: ("specialization", "license_number"),
}
