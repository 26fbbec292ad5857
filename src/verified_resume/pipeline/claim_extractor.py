"""Claim Extractor - flattens a tailored resume into addressable bullets."""

from __future__ import annotations

from verified_resume.models.claims import ExtractedBullet
from verified_resume.models.resume import TailoredResume

SUMMARY_ID = "summary_0"


def bullet_id(section: str, item_index: int, bullet_index: int) -> str:
    return f"{section}_{item_index}_{bullet_index}"


def extract_bullets(resume: TailoredResume) -> list[ExtractedBullet]:
    """Flatten ``resume`` into claims in a fixed order.

    Summary first, then experience bullets, then project bullets. Ids come
    from position only, so repeated runs give identical ids. Education is
    never extracted.
    """
    bullets: list[ExtractedBullet] = []

    if resume.summary and resume.summary.strip():
        bullets.append(
            ExtractedBullet(
                bullet_id=SUMMARY_ID,
                bullet_text=resume.summary,
                section="summary",
                section_index=0,
                bullet_index=0,
            )
        )

    for exp_index, exp in enumerate(resume.experience):
        for b_index, bullet in enumerate(exp.bullets):
            bullets.append(
                ExtractedBullet(
                    bullet_id=bullet_id("experience", exp_index, b_index),
                    bullet_text=bullet.text,
                    section="experience",
                    section_index=exp_index,
                    bullet_index=b_index,
                    role_title=exp.title,
                    company=exp.company,
                )
            )

    for proj_index, project in enumerate(resume.projects):
        for b_index, bullet in enumerate(project.bullets):
            bullets.append(
                ExtractedBullet(
                    bullet_id=bullet_id("projects", proj_index, b_index),
                    bullet_text=bullet.text,
                    section="projects",
                    section_index=proj_index,
                    bullet_index=b_index,
                    project_name=project.name,
                )
            )

    return bullets
