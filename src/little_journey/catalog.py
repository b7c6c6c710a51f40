"""Milestone template catalog, grouped by cultural tradition."""

from typing import Dict, Optional, Tuple

from .models.milestone import CulturalTradition, MilestoneTemplate


MILESTONE_TEMPLATES: Tuple[MilestoneTemplate, ...] = (
    # Chinese
    MilestoneTemplate(
        id="full_month",
        title="Full Month",
        title_local="满月",
        description="Traditional celebration at 30 days old",
        cultural_tradition=CulturalTradition.CHINESE,
        days_from_birth=30,
        typical_age_months_min=1,
        typical_age_months_max=1,
    ),
    MilestoneTemplate(
        id="hundred_days",
        title="100 Days",
        title_local="百日",
        description="Celebration of first 100 days",
        cultural_tradition=CulturalTradition.CHINESE,
        days_from_birth=100,
        typical_age_months_min=3,
        typical_age_months_max=4,
    ),
    MilestoneTemplate(
        id="zhua_zhou",
        title="Zhua Zhou",
        title_local="抓周",
        description="First birthday grab ceremony",
        cultural_tradition=CulturalTradition.CHINESE,
        days_from_birth=365,
        typical_age_months_min=12,
        typical_age_months_max=12,
    ),
    MilestoneTemplate(
        id="first_lunar_new_year",
        title="First Lunar New Year",
        description="Baby's first Chinese New Year celebration",
        cultural_tradition=CulturalTradition.CHINESE,
        typical_age_months_min=0,
        typical_age_months_max=12,
    ),
    # Malay
    MilestoneTemplate(
        id="aqiqah",
        title="Aqiqah",
        description="Islamic naming ceremony on 7th day",
        cultural_tradition=CulturalTradition.MALAY,
        days_from_birth=7,
        typical_age_months_min=0,
        typical_age_months_max=1,
    ),
    MilestoneTemplate(
        id="cukur_jambul",
        title="Cukur Jambul",
        description="Head shaving ceremony",
        cultural_tradition=CulturalTradition.MALAY,
        typical_age_months_min=0,
        typical_age_months_max=3,
    ),
    MilestoneTemplate(
        id="first_hari_raya",
        title="First Hari Raya",
        description="Baby's first Eid celebration",
        cultural_tradition=CulturalTradition.MALAY,
        typical_age_months_min=0,
        typical_age_months_max=12,
    ),
    # Indian
    MilestoneTemplate(
        id="naming_ceremony",
        title="Naming Ceremony",
        description="Traditional naming ritual",
        cultural_tradition=CulturalTradition.INDIAN,
        typical_age_months_min=0,
        typical_age_months_max=1,
    ),
    MilestoneTemplate(
        id="annaprashan",
        title="Annaprashan",
        description="First solid food ceremony",
        cultural_tradition=CulturalTradition.INDIAN,
        typical_age_months_min=6,
        typical_age_months_max=8,
    ),
    MilestoneTemplate(
        id="first_deepavali",
        title="First Deepavali",
        description="Baby's first Diwali celebration",
        cultural_tradition=CulturalTradition.INDIAN,
        typical_age_months_min=0,
        typical_age_months_max=12,
    ),
    # Universal
    MilestoneTemplate(
        id="first_smile",
        title="First Smile",
        description="Baby's first social smile",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=1,
        typical_age_months_max=3,
    ),
    MilestoneTemplate(
        id="first_laugh",
        title="First Laugh",
        description="Baby's first laugh out loud",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=3,
        typical_age_months_max=5,
    ),
    MilestoneTemplate(
        id="first_steps",
        title="First Steps",
        description="Baby's first independent steps",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=9,
        typical_age_months_max=15,
    ),
    MilestoneTemplate(
        id="first_words",
        title="First Words",
        description="Baby's first meaningful words",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=10,
        typical_age_months_max=15,
    ),
    MilestoneTemplate(
        id="first_tooth",
        title="First Tooth",
        description="Baby's first tooth appears",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=4,
        typical_age_months_max=10,
    ),
    MilestoneTemplate(
        id="first_haircut",
        title="First Haircut",
        description="Baby's first haircut",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=6,
        typical_age_months_max=24,
    ),
    MilestoneTemplate(
        id="first_solid_food",
        title="First Solid Food",
        description="Baby's first taste of solid food",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=4,
        typical_age_months_max=8,
    ),
    MilestoneTemplate(
        id="first_birthday",
        title="First Birthday",
        description="Baby turns one",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        days_from_birth=365,
        typical_age_months_min=12,
        typical_age_months_max=12,
    ),
    MilestoneTemplate(
        id="first_swim",
        title="First Swim",
        description="Baby's first time in the pool",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=3,
        typical_age_months_max=24,
    ),
    MilestoneTemplate(
        id="first_day_school",
        title="First Day of School",
        description="Starting preschool or childcare",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=18,
        typical_age_months_max=48,
    ),
    # Singapore local
    MilestoneTemplate(
        id="first_hawker_food",
        title="First Hawker Food",
        description="Baby's first meal at a hawker centre",
        cultural_tradition=CulturalTradition.UNIVERSAL,
        typical_age_months_min=6,
        typical_age_months_max=18,
    ),
    MilestoneTemplate(
        id="first_mrt_ride",
        title="First MRT Ride",
        description="Baby's first ride on the MRT",
        cultural_tradition=CulturalTradition.UNIVERSAL,
    ),
    MilestoneTemplate(
        id="first_zoo_visit",
        title="First Zoo Visit",
        description="Baby's first visit to Singapore Zoo",
        cultural_tradition=CulturalTradition.UNIVERSAL,
    ),
)

TEMPLATES_BY_ID: Dict[str, MilestoneTemplate] = {t.id: t for t in MILESTONE_TEMPLATES}

if len(TEMPLATES_BY_ID) != len(MILESTONE_TEMPLATES):
    raise ValueError("Duplicate milestone template ids in catalog")


def get_template(template_id: str) -> Optional[MilestoneTemplate]:
    """Look up a milestone template by id."""
    return TEMPLATES_BY_ID.get(template_id)
