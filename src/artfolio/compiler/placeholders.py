"""Static placeholder content used to pre-fill compiled sites.

Medium bundles supply the home-page prose; the about examples are the
canned paragraphs inserted for each about section the survey enables.
"""

from __future__ import annotations

from pydantic import BaseModel

from artfolio.content.models import Medium


class PlaceholderBundle(BaseModel):
    """Medium-specific example prose."""

    title: str
    subtitle: str
    description: str


MEDIUM_PLACEHOLDERS: dict[Medium, PlaceholderBundle] = {
    Medium.PAINTING: PlaceholderBundle(
        title="Contemporary Painting Studio",
        subtitle="Exploring color, form, and emotion through paint",
        description=(
            "My paintings explore the intersection of color and emotion, creating "
            "vibrant compositions that speak to the human experience."
        ),
    ),
    Medium.PHOTOGRAPHY: PlaceholderBundle(
        title="Visual Storytelling",
        subtitle="Capturing moments that matter",
        description=(
            "Through my lens, I capture the beauty in everyday moments and the "
            "extraordinary in the ordinary."
        ),
    ),
    Medium.POETRY: PlaceholderBundle(
        title="Words & Verses",
        subtitle="Poetry that speaks to the soul",
        description=(
            "My poetry explores themes of love, loss, hope, and the human condition "
            "through carefully crafted verses."
        ),
    ),
    Medium.FURNITURE: PlaceholderBundle(
        title="Functional Art",
        subtitle="Where design meets craftsmanship",
        description=(
            "I create furniture pieces that blend functionality with artistic "
            "expression, using sustainable materials and traditional techniques."
        ),
    ),
    Medium.MULTI_MEDIUM: PlaceholderBundle(
        title="Mixed Media Art",
        subtitle="Exploring creativity across mediums",
        description=(
            "My work spans multiple mediums, combining traditional and contemporary "
            "techniques to create unique artistic expressions."
        ),
    ),
}


def placeholders_for(medium: str | None) -> PlaceholderBundle:
    """Look up the bundle for ``medium``, falling back to multi-medium."""
    try:
        return MEDIUM_PLACEHOLDERS[Medium(medium)]
    except ValueError:
        return MEDIUM_PLACEHOLDERS[Medium.MULTI_MEDIUM]


def explore_text_for(bundle: PlaceholderBundle) -> str:
    subject = bundle.title.lower() if bundle.title else "art"
    return (
        f"Explore my collection of {subject} works, each piece carefully crafted "
        "to capture the essence of light, color, and emotion."
    )


ABOUT_TITLE = "About Me"
ABOUT_BIO = (
    "I am an artist currently based in [Location]. My work has been exhibited in "
    "galleries and shows, and I continue to develop my practice through exploration "
    "of various mediums and techniques."
)

# Keyed by the camelCase section names used in aboutContent paths.
ABOUT_EXAMPLE_SECTIONS: dict[str, str] = {
    "education": (
        "<p><strong>2023</strong> - BFA in Fine Arts, [University Name]</p>\n"
        "<p><strong>2021</strong> - Certificate in Traditional Painting Techniques, "
        "[Art School]</p>"
    ),
    "workExperience": (
        "<p><strong>2023-Present</strong> - Freelance Artist</p>\n"
        "<p><strong>2022-2023</strong> - Gallery Assistant, [Gallery Name]</p>"
    ),
    "recentlyFeatured": (
        "<p><strong>2024</strong> - Art Magazine Feature</p>\n"
        "<p><strong>2024</strong> - Online Gallery Spotlight</p>"
    ),
    "selectedExhibition": (
        '<p><strong>2024</strong> - "Contemporary Visions" Group Show, [Gallery Name]</p>\n'
        '<p><strong>2023</strong> - "Emerging Artists" Solo Exhibition, [Gallery Name]</p>'
    ),
    "selectedPress": (
        "<p><strong>2024</strong> - Featured in [Art Publication]</p>\n"
        "<p><strong>2023</strong> - Interview with [Magazine Name]</p>"
    ),
    "selectedAwards": (
        "<p><strong>2024</strong> - Emerging Artist Grant</p>\n"
        "<p><strong>2023</strong> - Excellence in Fine Arts Award</p>"
    ),
    "selectedProjects": (
        "<p><strong>2024</strong> - Community Mural Project</p>\n"
        "<p><strong>2023</strong> - Artist Talk at [Institution]</p>"
    ),
    "contactInfo": (
        '<p>Email: <a href="mailto:artist@email.com" style="color: #333;">'
        "artist@email.com</a></p>\n"
        "<p>Phone: [Phone Number]</p>\n"
        "<p>Studio: [Address]</p>"
    ),
}
