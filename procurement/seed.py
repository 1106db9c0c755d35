import uuid
from sqlalchemy.orm import Session
from procurement.db.session import get_session_factory
from procurement.models.employee import Employee, Organization, OrganizationResponsible
from procurement.models.enums import OrganizationType

# organization name -> (type, representatives)
DEMO_ORGANIZATIONS = {
    "Stroy Invest": (OrganizationType.LLC, ["ivan", "olga", "petr"]),
    "Fast Delivery": (OrganizationType.JSC, ["anna"]),
    "Kuznetsov IE": (OrganizationType.IE, ["kuznetsov"]),
}

DEMO_EMPLOYEES = ["ivan", "olga", "petr", "anna", "kuznetsov", "freelancer"]


def seed_identities(db: Session) -> dict:
    """Insert demo employees, organizations and memberships; returns ids by name."""
    ids = {}
    for username in DEMO_EMPLOYEES:
        emp = Employee(id=uuid.uuid4(), username=username, first_name=username.title())
        db.add(emp)
        ids[username] = emp.id

    for name, (org_type, members) in DEMO_ORGANIZATIONS.items():
        org = Organization(id=uuid.uuid4(), name=name, type=org_type.value)
        db.add(org)
        ids[name] = org.id
        for username in members:
            db.add(OrganizationResponsible(organization_id=org.id, user_id=ids[username]))

    db.commit()
    return ids


def seed():
    db: Session = get_session_factory()()
    try:
        ids = seed_identities(db)
    finally:
        db.close()

    print("seed complete")
    for name, id_ in ids.items():
        print(f"  {name}: {id_}")


if __name__ == "__main__":
    seed()
