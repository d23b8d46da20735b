"""
Default values for the resume document.

Provides:
- default_document(): the starter resume shown when nothing is stored
- empty_experience() / empty_education() / empty_project(): factories used when
  the form adds a new list entry
"""

from resume_maker.contexts.editing.document import (
    Document,
    Education,
    Experience,
    Meta,
    Profile,
    Project,
    Theme,
)

DEFAULT_SKILLS = ["JavaScript", "React", "Node.js", "Express", "MongoDB", "TailwindCSS"]


def empty_experience() -> Experience:
    """New experience entry with one blank bullet ready for editing."""
    return Experience(bullets=[""])


def empty_education() -> Education:
    return Education()


def empty_project() -> Project:
    return Project(tech=[])


def default_document() -> Document:
    """
    Get the starter document.

    Returns a fresh instance on every call so callers may mutate it freely.
    """
    return Document(
        meta=Meta(theme=Theme.CLASSIC, dark=False),
        profile=Profile(
            name="Your Name",
            title="Full-Stack Developer",
            email="you@example.com",
            phone="+91-XXXXXXXXXX",
            location="City, Country",
            website="https://your-portfolio.dev",
            summary=(
                "Passionate developer with experience building end-to-end web apps "
                "using React, Node.js, and cloud services."
            ),
        ),
        skills=list(DEFAULT_SKILLS),
        experience=[
            Experience(
                role="Software Engineer",
                company="Awesome Co",
                location="Remote",
                start="2023",
                end="Present",
                bullets=[
                    "Built and scaled a MERN app serving 50k+ users.",
                    "Implemented CI/CD and improved deployment speed by 40%.",
                ],
            )
        ],
        education=[
            Education(
                school="Your College",
                degree="B.Tech in Computer Science",
                start="2019",
                end="2023",
                details="GPA: 8.5/10 | Relevant Coursework: DSA, DBMS, OS",
            )
        ],
        projects=[
            Project(
                name="URL Shortener",
                link="https://short.ly/yourlink",
                description="Custom URL shortener with analytics and QR codes.",
                tech=["Next.js", "PostgreSQL", "Prisma", "Razorpay"],
            )
        ],
    )
