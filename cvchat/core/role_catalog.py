"""Built-in form specifications for common professions.

Used when the backend starts a session without returning a form
specification, so the form tab is still usable offline.
"""

from typing import Dict, List, Optional

from cvchat.models.form_models import FormSpecification

DEFAULT_ROLE = "default"

_EDUCATION = ["degree", "institution", "graduationYear", "gpa"]
_EDUCATION_NO_GPA = ["degree", "institution", "graduationYear"]
_CERTIFICATIONS = ["certificationName", "issuingOrganization", "year"]


def _role(basic_info: List[str], sections: Dict[str, dict]) -> dict:
    return {
        "required": {
            "basicInfo": {name: True for name in basic_info},
            "sections": sections,
        }
    }


def _skills(*suggestions: str) -> dict:
    return {"required": True, "suggestions": list(suggestions)}


def _fields(*names: str, required: bool = True) -> dict:
    return {"required": required, "fields": list(names)}


ROLE_SPECIFICATIONS: Dict[str, dict] = {
    "Software Engineer": _role(
        ["name", "email", "phone", "github", "linkedin"],
        {
            "technicalSkills": _skills("JavaScript", "React", "Node.js", "Python", "SQL", "Git"),
            "workExperience": _fields(
                "companyName", "jobTitle", "duration", "responsibilities", "techStack"
            ),
            "projects": _fields(
                "projectName", "description", "technologies", "githubLink", "liveLink"
            ),
            "education": _fields(*_EDUCATION),
            "certifications": _fields(*_CERTIFICATIONS, required=False),
        },
    ),
    "Data Scientist": _role(
        ["name", "email", "phone", "linkedin"],
        {
            "technicalSkills": _skills(
                "Python",
                "R",
                "SQL",
                "Machine Learning",
                "TensorFlow",
                "PyTorch",
                "Statistical Analysis",
            ),
            "workExperience": _fields(
                "companyName", "jobTitle", "duration", "projectsHandled", "algorithms"
            ),
            "projects": _fields(
                "projectName", "description", "modelAccuracy", "technologies", "datasetUsed"
            ),
            "research": _fields(
                "paperTitle", "publication", "year", "abstract", required=False
            ),
            "education": _fields(
                "degree", "specialization", "institution", "graduationYear", "gpa"
            ),
        },
    ),
    "UX Designer": _role(
        ["name", "email", "phone", "portfolio", "behance"],
        {
            "skills": _skills(
                "Figma", "Adobe XD", "Sketch", "User Research", "Prototyping", "Wireframing"
            ),
            "workExperience": _fields(
                "companyName", "role", "duration", "projectsDelivered", "impact"
            ),
            "projects": _fields(
                "projectName",
                "description",
                "problemStatement",
                "solution",
                "userResearch",
                "projectLink",
            ),
            "education": _fields(*_EDUCATION_NO_GPA),
        },
    ),
    "Data Analyst": _role(
        ["name", "email", "phone", "linkedin", "github"],
        {
            "technicalSkills": _skills("Python", "R", "Excel", "Tableau", "Power BI", "SQL"),
            "workExperience": _fields(
                "companyName", "role", "duration", "dataMetricsImproved", "analyticsTools"
            ),
            "projects": _fields(
                "projectName", "problemSolved", "dataSources", "visualizationTools", "impact"
            ),
            "education": _fields(*_EDUCATION),
        },
    ),
    "Full-Stack Web Developer": _role(
        ["name", "email", "phone", "github", "linkedin"],
        {
            "technicalSkills": _skills(
                "React", "Node.js", "MongoDB", "HTML/CSS", "APIs", "UX Design"
            ),
            "workExperience": _fields(
                "companyName", "role", "duration", "responsibilities", "stackUsed"
            ),
            "projects": _fields("projectName", "description", "frontend", "backend", "link"),
            "education": _fields(*_EDUCATION),
        },
    ),
    "UI/UX Developer": _role(
        ["name", "email", "phone", "portfolio", "behance"],
        {
            "technicalSkills": _skills(
                "Figma", "Adobe XD", "HTML/CSS", "Responsive Design", "Animation"
            ),
            "workExperience": _fields(
                "companyName", "role", "duration", "projectsDelivered", "designSystem"
            ),
            "projects": _fields("projectName", "description", "tools", "testing", "link"),
            "education": _fields(*_EDUCATION_NO_GPA),
        },
    ),
    "DevOps Engineer": _role(
        ["name", "email", "phone", "linkedin", "github"],
        {
            "technicalSkills": _skills("AWS", "Docker", "Kubernetes", "Jenkins", "Ansible"),
            "workExperience": _fields(
                "companyName",
                "role",
                "duration",
                "pipelinesDeployed",
                "infrastructureManaged",
            ),
            "projects": _fields("projectName", "description", "tools", "automations", "link"),
            "education": _fields(*_EDUCATION),
        },
    ),
    "Product Manager": _role(
        ["name", "email", "phone", "linkedin"],
        {
            "strategicSkills": _skills(
                "Agile", "Customer Research", "Feature Prioritization", "KPIs", "Keynote"
            ),
            "workExperience": _fields(
                "companyName", "role", "duration", "productsLaunched", "metricsImpact"
            ),
            "achievements": _fields("title", "description", "metrics", "year"),
            "education": _fields(*_EDUCATION_NO_GPA),
        },
    ),
    "Digital Marketer": _role(
        ["name", "email", "phone", "linkedin", "portfolio"],
        {
            "skills": _skills(
                "SEO", "SEM", "Social Media", "Content Writing", "Google Analytics"
            ),
            "workExperience": _fields(
                "companyName", "role", "duration", "campaignsLed", "toolsUsed"
            ),
            "projects": _fields("projectName", "goals", "audience", "results", "link"),
            "education": _fields(*_EDUCATION_NO_GPA),
        },
    ),
    "Cybersecurity Analyst": _role(
        ["name", "email", "phone", "linkedin", "github"],
        {
            "technicalSkills": _skills(
                "Ethical Hacking", "Forensics", "Pen Testing", "Threat Modeling", "SIEM Tools"
            ),
            "workExperience": _fields(
                "companyName", "role", "duration", "incidentsHandled", "toolsUsed"
            ),
            "certifications": _fields(*_CERTIFICATIONS),
            "education": _fields(*_EDUCATION),
        },
    ),
    DEFAULT_ROLE: _role(
        ["name", "email", "phone", "linkedin"],
        {
            "professionalSkills": _skills(
                "Communication", "Teamwork", "Problem Solving", "Leadership", "Time Management"
            ),
            "professionalExperience": _fields(
                "role", "company", "duration", "responsibilities", "achievements"
            ),
            "professionalProjects": _fields(
                "projectTitle", "description", "role", "results", "link"
            ),
            "professionalEducation": _fields(*_EDUCATION),
        },
    ),
}


def known_roles() -> List[str]:
    return [name for name in ROLE_SPECIFICATIONS if name != DEFAULT_ROLE]


def lookup_role_spec(profession: Optional[str], use_default: bool = True) -> Optional[FormSpecification]:
    """Find the built-in specification for ``profession`` (case-insensitive).

    Unknown professions get the generic specification unless
    ``use_default`` is False.
    """
    wanted = (profession or "").strip().lower()
    for name, raw in ROLE_SPECIFICATIONS.items():
        if name != DEFAULT_ROLE and name.lower() == wanted:
            return FormSpecification.parse(raw)
    if use_default:
        return FormSpecification.parse(ROLE_SPECIFICATIONS[DEFAULT_ROLE])
    return None
