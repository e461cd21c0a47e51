import argparse

from hrdesk.core.logger import get_logger
from hrdesk.database.base import Base
from hrdesk.database.session import SessionLocal, engine
from hrdesk.models.user import Employee
from hrdesk.schemas.user import EmployeeCreate
from hrdesk.services.employee_service import create_employee

logger = get_logger("hrdesk.scripts")


def create_admin(employee_code: str, name: str, email: str, password: str) -> Employee | None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        existing_admin = db.query(Employee).filter(Employee.role == "admin").first()
        if existing_admin:
            logger.info(f"Admin already exists ({existing_admin.employee_code})")
            return None

        admin, _ = create_employee(db, EmployeeCreate(
            employee_code=employee_code,
            name=name,
            email=email,
            role="admin",
            password=password,
        ))
        logger.info(f"Admin {admin.employee_code} created successfully")
        return admin
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create the first hrdesk admin account")
    parser.add_argument("--code", default="ADMIN001")
    parser.add_argument("--name", default="System Admin")
    parser.add_argument("--email", default="admin@company.com")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()
    create_admin(args.code, args.name, args.email, args.password)


if __name__ == "__main__":
    main()
