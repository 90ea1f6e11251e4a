from django import forms

GENDER_CHOICES = [
    ("", "Select Gender"),
    ("male", "Male"),
    ("female", "Female"),
    ("other", "Other"),
]


class DoctorForm(forms.Form):
    name = forms.CharField(max_length=120)
    specialty = forms.CharField(max_length=120)
    experience = forms.IntegerField(min_value=0, label="Experience (years)")
    degree = forms.CharField(max_length=120)
    location = forms.CharField(max_length=120)
    gender = forms.ChoiceField(choices=GENDER_CHOICES)

    @classmethod
    def from_doctor(cls, doctor):
        """Unbound form pre-filled from a backend doctor record."""
        try:
            experience = int(doctor.get("experience") or 0)
        except (TypeError, ValueError):
            experience = 0

        return cls(initial={
            "name": doctor.get("name") or "",
            "specialty": doctor.get("specialty") or "",
            "experience": experience,
            "degree": doctor.get("degree") or "",
            "location": doctor.get("location") or "",
            "gender": doctor.get("gender") or "",
        })
