"""Records received from the clinic backend, as the UI sees them."""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Doctor:
    id: int | str | None
    name: str
    specialty: str = ""
    email: str = ""
    phone: str = ""
    available_times: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: dict) -> "Doctor":
        times = data.get("availableTimes") or []
        return cls(
            id=data.get("id"),
            name=data.get("name") or "Unknown Doctor",
            specialty=data.get("specialty") or data.get("speciality") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            available_times=tuple(times),
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "specialty": self.specialty,
            "email": self.email,
            "phone": self.phone,
            "availableTimes": list(self.available_times),
        }


@dataclass(frozen=True)
class Patient:
    id: int | str | None
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Patient":
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            phone=data.get("phone") or "",
            email=data.get("email") or "",
            address=data.get("address") or "",
        )

    def to_json(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PatientSummary:
    id: int | str
    name: str
    phone: str
    email: str


@dataclass(frozen=True)
class AppointmentRow:
    """One row of the doctor's appointment table."""

    appointment_id: int | str | None
    doctor_id: int | str | None
    patient: PatientSummary
    appointment_time: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "AppointmentRow":
        # flat fields first, nested records as fallback
        nested_patient = data.get("patient") or {}
        nested_doctor = data.get("doctor") or {}
        patient = PatientSummary(
            id=data.get("patientId") or nested_patient.get("id") or "N/A",
            name=data.get("patientName") or nested_patient.get("name") or "Unknown",
            phone=data.get("patientPhone") or nested_patient.get("phone") or "-",
            email=data.get("patientEmail") or nested_patient.get("email") or "-",
        )
        return cls(
            appointment_id=data.get("id") or data.get("appointmentId"),
            doctor_id=data.get("doctorId") or nested_doctor.get("id"),
            patient=patient,
            appointment_time=data.get("appointmentTime") or data.get("date") or "",
        )


@dataclass(frozen=True)
class PatientAppointment:
    """An appointment as listed on the patient's own appointments page."""

    id: int | str | None
    doctor_name: str
    appointment_time: str
    status: int | None = None

    @classmethod
    def from_json(cls, data: dict) -> "PatientAppointment":
        doctor = data.get("doctor") or {}
        return cls(
            id=data.get("id"),
            doctor_name=data.get("doctorName") or doctor.get("name") or "Unknown",
            appointment_time=data.get("appointmentTime") or data.get("date") or "",
            status=data.get("status"),
        )
