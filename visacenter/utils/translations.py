"""UI strings for the navbar, footer and job board, keyed by identifier."""

from typing import Dict, List

DEFAULT_LANGUAGE = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "nav.home": "Home",
        "nav.services": "Services",
        "nav.about": "About Us",
        "nav.clients": "Our Clients",
        "nav.jobs": "Jobs",
        "nav.contact": "Contact",
        "footer.quickLinks": "Quick Links",
        "footer.contactUs": "Contact Us",
        "footer.followUs": "Follow Us",
        "footer.rights": "All rights reserved.",
        "jobs.recentBanner": "New job opportunities have been posted recently. Click here to view.",
        "jobs.noJobs": "No jobs match your filters.",
        "jobs.clearFilters": "Clear Filters",
        "jobs.applyNow": "Apply Now",
        "form.submitted": "Application submitted successfully! We will contact you soon.",
        "form.selectJob": "Please select a job before submitting your application.",
        "form.fileTooLarge": "File size exceeds the 5MB limit.",
    },
    "ar": {
        "nav.home": "الرئيسية",
        "nav.services": "خدماتنا",
        "nav.about": "من نحن",
        "nav.clients": "عملاؤنا",
        "nav.jobs": "الوظائف",
        "nav.contact": "اتصل بنا",
        "footer.quickLinks": "روابط سريعة",
        "footer.contactUs": "اتصل بنا",
        "footer.followUs": "تابعنا",
        "footer.rights": "جميع الحقوق محفوظة.",
        "jobs.noJobs": "لا توجد وظائف مطابقة.",
        "jobs.clearFilters": "مسح عوامل التصفية",
        "jobs.applyNow": "قدّم الآن",
    },
}

# (translation key, path) in display order
NAV_LINKS = [
    ("nav.home", "/"),
    ("nav.services", "/services"),
    ("nav.about", "/about"),
    ("nav.clients", "/clients"),
    ("nav.jobs", "/job-apply"),
    ("nav.contact", "/contact"),
]


def resolve_language(lang: str = None) -> str:
    if lang and lang.lower() in TRANSLATIONS:
        return lang.lower()
    return DEFAULT_LANGUAGE


def get_translations(lang: str = None) -> Dict[str, str]:
    """All strings for ``lang``; keys it lacks fall back to English."""
    lang = resolve_language(lang)
    return {**TRANSLATIONS[DEFAULT_LANGUAGE], **TRANSLATIONS[lang]}


def navigation(lang: str = None) -> List[Dict[str, str]]:
    strings = get_translations(lang)
    return [{"name": strings.get(key, key), "path": path} for key, path in NAV_LINKS]
