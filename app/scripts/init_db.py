"""
Create the database schema and optionally seed starter day templates.
Run once per environment when AUTO_CREATE_TABLES is disabled:

    python -m app.scripts.init_db [--seed-user USER_ID]
"""

import argparse
import logging
from sqlalchemy.orm import Session
from app.database.session import Database, create_tables
from app.modules.templates.schemas import TemplateCreate, TemplateTaskInput
from app.modules.templates.service import TemplateService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STARTER_TEMPLATES = [
    {
        "name": "Infusion Day",
        "color": "#E57373",
        "tasks": [
            "Drink 2 glasses of water before leaving",
            "Take pre-medication",
            "Pack snacks and blanket",
            "Bring medication list and insurance card",
            "Log symptoms after infusion",
        ],
    },
    {
        "name": "Rest Day",
        "color": "#81C784",
        "tasks": ["Short walk", "Check temperature", "Log symptoms"],
    },
]


def seed_starter_templates(db: Session, user_id: str) -> int:
    """Create the starter templates the user does not have yet (matched by name)."""
    service = TemplateService(db)
    existing = {t.name for t in service.list_templates(user_id)}
    created_count = 0
    for starter in STARTER_TEMPLATES:
        if starter["name"] in existing:
            logger.debug(f"Template already present: {starter['name']}")
            continue
        service.create_template(
            TemplateCreate(
                name=starter["name"],
                color=starter["color"],
                tasks=[TemplateTaskInput(title=title) for title in starter["tasks"]],
            ),
            user_id,
        )
        created_count += 1
    logger.info(f"Seeded {created_count} starter templates for user {user_id}")
    return created_count


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--seed-user", help="user id to receive the starter templates")
    args = parser.parse_args()

    create_tables()
    if args.seed_user:
        with Database.get_session_factory()() as db:
            seed_starter_templates(db, args.seed_user)


if __name__ == "__main__":
    main()
