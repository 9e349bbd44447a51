import logging

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, FacadeResult
from fleet.schemas.auth import SessionIdentity
from fleet.schemas.driver import DriverCreateRequest, DriverUpdateRequest
from fleet.utils.exceptions import NotFoundException, DuplicateEntryException, ForbiddenException
from fleet.utils.security import hash_password

logger = logging.getLogger(__name__)


def public_driver(d: dict | None) -> dict | None:
    """Driver record without credentials."""
    if d is None:
        return None
    return {k: v for k, v in d.items() if k != "password_hash"}


class DriverService:

    def list_drivers(
        self, facade: DataAccessFacade, search: str | None = None, status: str | None = None,
    ) -> FacadeResult:
        result = facade.list(Collection.DRIVERS)
        items = result.data
        if search:
            kw = search.lower()
            items = [d for d in items if kw in (d.get("name") or "").lower()
                     or kw in (d.get("employee_id") or "").lower()
                     or kw in (d.get("license_number") or "").lower()]
        if status:
            items = [d for d in items if d.get("status") == status]
        result.data = [public_driver(d) for d in items]
        return result

    def _get_raw(self, facade: DataAccessFacade, driver_id: str) -> dict:
        d = facade.get(Collection.DRIVERS, driver_id).data
        if not d:
            raise NotFoundException("Driver")
        return d

    def get_driver(self, facade: DataAccessFacade, driver_id: str, identity: SessionIdentity) -> dict:
        if not identity.is_admin and identity.driverId != driver_id:
            raise ForbiddenException("You can only view your own driver profile")
        return public_driver(self._get_raw(facade, driver_id))

    def _check_unique(self, facade: DataAccessFacade, username: str | None, employee_id: str | None):
        for d in facade.list(Collection.DRIVERS).data:
            if username and d.get("username") == username:
                raise DuplicateEntryException("Username already taken", field="username")
            if employee_id and d.get("employee_id") == employee_id:
                raise DuplicateEntryException("Employee ID already registered", field="employee_id")

    def create_driver(self, facade: DataAccessFacade, data: DriverCreateRequest) -> FacadeResult:
        self._check_unique(facade, data.username, data.employee_id)

        record = data.model_dump(mode="json", exclude={"password"})
        record["password_hash"] = hash_password(data.password)
        result = facade.create(Collection.DRIVERS, record)
        logger.info(f"Created driver {data.name} ({data.employee_id})")
        result.data = public_driver(result.data)
        return result

    def update_driver(self, facade: DataAccessFacade, driver_id: str, data: DriverUpdateRequest) -> FacadeResult:
        current = self._get_raw(facade, driver_id)
        changes = data.model_dump(mode="json", exclude_none=True, exclude={"password"})
        if data.password:
            changes["password_hash"] = hash_password(data.password)

        result = facade.update(Collection.DRIVERS, driver_id, changes, current=current)
        logger.info(f"Updated driver {driver_id}: {sorted(k for k in changes if k != 'password_hash')}")
        result.data = public_driver(result.data)
        return result


driver_service = DriverService()
