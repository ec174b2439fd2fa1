"""Built-in form templates and description-based form generation."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from formcraft import logger
from formcraft.exceptions import GenerationError, TemplateNotFoundError
from formcraft.typing.enums import ConditionOperator, FieldKind
from formcraft.typing.models import ConditionalRule, FormField, FormSchema, FormTemplate

if TYPE_CHECKING:
    from formcraft.typing.protocol import SchemaSource

_FREQUENCY = ["Never", "Rarely", "Sometimes", "Often", "Always"]


def _field(
    field_id: str,
    kind: FieldKind,
    label: str,
    *,
    placeholder: str | None = None,
    required: bool = False,
    options: list[str] | None = None,
    rows: int | None = None,
    rule: ConditionalRule | None = None,
) -> FormField:
    return FormField(
        id=field_id,
        kind=kind,
        label=label,
        placeholder=placeholder,
        required=required,
        options=options,
        rows=rows,
        conditional_rule=rule,
    )


_TEMPLATES: tuple[FormTemplate, ...] = (
    FormTemplate(
        id="aba-assessment",
        title="ABA Assessment Form",
        category="Behavioral Therapy",
        description="Comprehensive assessment form for Applied Behavior Analysis therapy sessions.",
        fields=[
            _field("client-name", FieldKind.TEXT, "Client Name", placeholder="Enter client's full name", required=True),
            _field("client-dob", FieldKind.DATE, "Date of Birth", required=True),
            _field("guardian-name", FieldKind.TEXT, "Parent/Guardian Name", required=True),
            _field("contact-number", FieldKind.PHONE, "Contact Number", placeholder="Enter phone number", required=True),
            _field("email", FieldKind.EMAIL, "Email Address", placeholder="Enter email address", required=True),
            _field(
                "diagnosis",
                FieldKind.SELECT,
                "Primary Diagnosis",
                placeholder="Select primary diagnosis",
                required=True,
                options=["Autism Spectrum Disorder", "ADHD", "Developmental Delay", "Other (please specify)"],
            ),
            _field(
                "diagnosis-other",
                FieldKind.TEXT,
                "If Other Diagnosis, Please Specify",
                placeholder="Enter diagnosis",
                required=True,
                rule=ConditionalRule(
                    depends_on="diagnosis",
                    operator=ConditionOperator.EQUALS.value,
                    comparand="Other (please specify)",
                ),
            ),
            _field(
                "behaviors",
                FieldKind.CHECKBOX,
                "Behaviors of Concern",
                required=True,
                options=["Aggression", "Self-injury", "Tantrums", "Non-compliance", "Elopement"],
            ),
            _field("behavior-description", FieldKind.TEXTAREA, "Behavior Description", required=True, rows=4),
            _field("previous-therapy", FieldKind.RADIO, "Previous ABA Therapy?", required=True, options=["Yes", "No"]),
            _field("therapy-goals", FieldKind.TEXTAREA, "Goals for Therapy", required=True, rows=4),
            _field("consent", FieldKind.TOGGLE, "I consent to the assessment and potential treatment", required=True),
            _field("signature", FieldKind.SIGNATURE, "Parent/Guardian Signature", required=True),
        ],
    ),
    FormTemplate(
        id="hipaa-consent",
        title="HIPAA Consent Form",
        category="Legal & Compliance",
        description="Standard HIPAA consent form for healthcare providers.",
        fields=[
            _field("patient-name", FieldKind.TEXT, "Patient Name", required=True),
            _field("patient-dob", FieldKind.DATE, "Date of Birth", required=True),
            _field(
                "acknowledgment",
                FieldKind.CHECKBOX,
                "I acknowledge that:",
                required=True,
                options=[
                    "I have received a copy of the Notice of Privacy Practices",
                    "I understand I may revoke this consent in writing",
                ],
            ),
            _field(
                "communication-preferences",
                FieldKind.CHECKBOX,
                "Preferred methods of communication:",
                required=True,
                options=["Phone call", "Text message", "Email", "Patient portal", "Mail"],
            ),
            _field(
                "phone",
                FieldKind.PHONE,
                "Phone Number",
                required=True,
                rule=ConditionalRule(depends_on="communication-preferences", operator="contains", comparand="Phone"),
            ),
            _field(
                "email",
                FieldKind.EMAIL,
                "Email Address",
                required=True,
                rule=ConditionalRule(depends_on="communication-preferences", operator="contains", comparand="Email"),
            ),
            _field("signature", FieldKind.SIGNATURE, "Patient/Guardian Signature", required=True),
            _field("date", FieldKind.DATE, "Date", required=True),
        ],
    ),
    FormTemplate(
        id="autism-screening",
        title="Autism Screening Questionnaire",
        category="Assessment",
        description="Screening questionnaire for autism spectrum disorder in children.",
        fields=[
            _field("child-name", FieldKind.TEXT, "Child's Name", required=True),
            _field("child-age", FieldKind.NUMBER, "Child's Age (in years)", placeholder="Enter age", required=True),
            _field("parent-name", FieldKind.TEXT, "Parent/Guardian Name", required=True),
            _field(
                "social-interaction",
                FieldKind.RADIO,
                "Does your child make eye contact when you speak to them?",
                required=True,
                options=_FREQUENCY,
            ),
            _field(
                "pretend-play",
                FieldKind.RADIO,
                "Does your child engage in pretend play?",
                required=True,
                options=_FREQUENCY,
                rule=ConditionalRule(depends_on="child-age", operator="greater_than", comparand="1"),
            ),
            _field(
                "additional-concerns",
                FieldKind.TEXTAREA,
                "Please describe any other concerns you have about your child's development:",
                rows=4,
            ),
            _field(
                "consent-evaluation",
                FieldKind.TOGGLE,
                "I consent to having my child evaluated further if screening indicates concerns",
                required=True,
            ),
        ],
    ),
    FormTemplate(
        id="patient-assessment",
        title="Patient Assessment Form",
        category="Assessment",
        description="General patient assessment covering history, medications and the main concern.",
        fields=[
            _field("patient-name", FieldKind.TEXT, "Patient Name", required=True),
            _field("date-of-birth", FieldKind.DATE, "Date of Birth", required=True),
            _field("contact-number", FieldKind.PHONE, "Contact Number", required=True),
            _field("email", FieldKind.EMAIL, "Email Address"),
            _field("medical-history", FieldKind.TEXTAREA, "Medical History", required=True, rows=4),
            _field("current-medications", FieldKind.TEXTAREA, "Current Medications", rows=3),
            _field("primary-concern", FieldKind.TEXTAREA, "Primary Concern", required=True, rows=3),
            _field("consent", FieldKind.TOGGLE, "Consent to Treatment", placeholder="I consent to treatment", required=True),
        ],
    ),
    FormTemplate(
        id="patient-intake",
        title="Patient Intake Form",
        category="Registration",
        description="New patient registration with contact, emergency contact and insurance details.",
        fields=[
            _field("patient-name", FieldKind.TEXT, "Patient Name", required=True),
            _field("date-of-birth", FieldKind.DATE, "Date of Birth", required=True),
            _field(
                "gender",
                FieldKind.RADIO,
                "Gender",
                required=True,
                options=["Male", "Female", "Non-binary", "Prefer not to say"],
            ),
            _field("address", FieldKind.TEXTAREA, "Address", required=True, rows=3),
            _field("phone", FieldKind.PHONE, "Phone Number", required=True),
            _field("email", FieldKind.EMAIL, "Email Address"),
            _field("emergency-contact", FieldKind.TEXT, "Emergency Contact Name", required=True),
            _field("emergency-phone", FieldKind.PHONE, "Emergency Contact Phone", required=True),
            _field("has-insurance", FieldKind.RADIO, "Do you have health insurance?", options=["Yes", "No"]),
            _field(
                "insurance-provider",
                FieldKind.TEXT,
                "Insurance Provider",
                required=True,
                rule=ConditionalRule(depends_on="has-insurance", operator="equals", comparand="Yes"),
            ),
            _field("insurance-card", FieldKind.FILE, "Insurance Card (front)"),
        ],
    ),
)

# First matching entry wins.
_GENERATION_ROUTES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("aba", "behavior", "applied behavior analysis"), "aba-assessment"),
    (("hipaa", "consent"), "hipaa-consent"),
    (("autism", "screening", "questionnaire"), "autism-screening"),
    (("assessment", "evaluation"), "patient-assessment"),
    (("intake", "registration"), "patient-intake"),
)
_DEFAULT_TEMPLATE_ID = "patient-assessment"

_SUGGESTIONS: dict[str, tuple[FormField, ...]] = {
    "aba": (
        _field("communication-skills", FieldKind.TEXTAREA, "Communication Skills", rows=3),
        _field(
            "preferred-reinforcers",
            FieldKind.SELECT,
            "Preferred Reinforcers",
            options=["Toys", "Food", "Activities", "Social praise", "Other"],
        ),
    ),
    "consent": (
        _field("emergency-authorization", FieldKind.TOGGLE, "Emergency Contact Authorization"),
        _field("special-instructions", FieldKind.TEXTAREA, "Special Instructions", rows=3),
    ),
    "assessment": (
        _field("family-history", FieldKind.TEXTAREA, "Family Medical History", rows=3),
        _field(
            "symptoms",
            FieldKind.CHECKBOX,
            "Symptoms",
            placeholder="Select all that apply",
            required=True,
            options=["Fever", "Cough", "Fatigue", "Pain", "Nausea", "Dizziness"],
        ),
    ),
    "intake": (
        _field("preferred-language", FieldKind.SELECT, "Preferred Language", options=["English", "Spanish", "French", "Other"]),
        _field("need-interpreter", FieldKind.TOGGLE, "Need Interpreter"),
    ),
    "default": (
        _field("additional-notes", FieldKind.TEXTAREA, "Additional Notes", rows=3),
        _field("follow-up", FieldKind.TOGGLE, "Follow-up Required"),
    ),
}

_SUGGESTION_ROUTES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("aba", "behavior", "applied behavior analysis"), "aba"),
    (("consent", "hipaa"), "consent"),
    (("assessment", "evaluation"), "assessment"),
    (("intake", "registration"), "intake"),
)


def _route(text: str, routes: tuple[tuple[tuple[str, ...], str], ...], default: str) -> str:
    lowered = text.lower()
    for keywords, target in routes:
        if any(keyword in lowered for keyword in keywords):
            return target
    return default


class TemplateCatalog:
    """Read-only catalog of form templates."""

    def __init__(self, templates: tuple[FormTemplate, ...] = _TEMPLATES) -> None:
        self._templates = {template.id: template for template in templates}

    def list_templates(self) -> list[FormTemplate]:
        """Return every template in catalog order."""
        return list(self._templates.values())

    def get(self, template_id: str) -> FormTemplate:
        """Return a template by id.

        Args:
            template_id (str): Template id.

        Raises:
            TemplateNotFoundError: If the id is unknown.

        Returns:
            FormTemplate: Matching template.
        """
        try:
            return self._templates[template_id]
        except KeyError as exc:
            raise TemplateNotFoundError(template_id=template_id) from exc

    def search(self, query: str) -> list[FormTemplate]:
        """Return templates whose title or category contains `query` (case-insensitive).

        Args:
            query (str): Search text; blank returns every template.

        Returns:
            list[FormTemplate]: Matching templates in catalog order.
        """
        needle = query.strip().lower()
        return [
            template
            for template in self._templates.values()
            if needle in template.title.lower() or needle in template.category.lower()
        ]

    def generate(self, description: str) -> FormSchema:
        """Pick the template whose keywords appear in a free-text description.

        Args:
            description (str): What the user asked for.

        Raises:
            GenerationError: If the description is blank.

        Returns:
            FormSchema: Schema of the matched template.
        """
        if not description.strip():
            raise GenerationError(message="Please provide a description of the form you want to create.")
        template_id = _route(description, _GENERATION_ROUTES, _DEFAULT_TEMPLATE_ID)
        logger.info("Form generated from description", extra={"template_id": template_id})
        return self.get(template_id).to_schema()

    def suggest_fields(self, form_title: str, existing_fields: list[FormField]) -> list[FormField]:
        """Propose extra fields for a form based on its title.

        Suggested ids are made unique against `existing_fields`.

        Args:
            form_title (str): Title of the form being edited.
            existing_fields (list[FormField]): Fields already in the form.

        Returns:
            list[FormField]: Suggested fields.
        """
        group = _route(form_title, _SUGGESTION_ROUTES, "default")
        taken = {form_field.id for form_field in existing_fields}
        batch = uuid4().hex[:8]
        suggestions: list[FormField] = []
        for index, suggestion in enumerate(_SUGGESTIONS[group], start=1):
            field_id = suggestion.id if suggestion.id not in taken else f"field-{batch}-{index}"
            taken.add(field_id)
            suggestions.append(suggestion.model_copy(update={"id": field_id}))
        return suggestions


def generate_form_from_description(description: str, source: SchemaSource | None = None) -> FormSchema:
    """Generate a schema from a description.

    Args:
        description (str): What the user asked for.
        source (SchemaSource | None): Schema producer; defaults to the built-in catalog.

    Returns:
        FormSchema: Generated schema.
    """
    return (source or TemplateCatalog()).generate(description)


def suggest_additional_fields(
    form_title: str,
    existing_fields: list[FormField],
    source: SchemaSource | None = None,
) -> list[FormField]:
    """Suggest extra fields for a form.

    Args:
        form_title (str): Title of the form being edited.
        existing_fields (list[FormField]): Fields already in the form.
        source (SchemaSource | None): Schema producer; defaults to the built-in catalog.

    Returns:
        list[FormField]: Suggested fields.
    """
    return (source or TemplateCatalog()).suggest_fields(form_title, existing_fields)
