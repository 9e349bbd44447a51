import logging

from fleet.config import settings
from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade
from fleet.models.driver import DriverStatus
from fleet.schemas.auth import LoginRequest, RoleName
from fleet.utils.security import verify_password, create_access_token
from fleet.utils.exceptions import UnauthorizedException, AccountInactiveException

logger = logging.getLogger(__name__)


class AuthService:

    def _admin_identity(self) -> dict:
        return {
            "id":       f"admin-{settings.ADMIN_USERNAME}",
            "email":    settings.ADMIN_EMAIL,
            "role":     RoleName.ADMIN.value,
            "name":     settings.ADMIN_NAME,
            "driverId": None,
        }

    def _driver_identity(self, driver: dict) -> dict:
        return {
            "id":       driver["id"],
            "email":    driver.get("email"),
            "role":     RoleName.DRIVER.value,
            "name":     driver.get("name"),
            "driverId": driver["id"],
        }

    def _find_driver(self, facade: DataAccessFacade, username: str) -> dict | None:
        for d in facade.list(Collection.DRIVERS).data:
            if d.get("username") == username:
                return d
        return None

    def login(self, facade: DataAccessFacade, data: LoginRequest) -> dict:
        if data.username == settings.ADMIN_USERNAME:
            if not verify_password(data.password, settings.ADMIN_PASSWORD_HASH):
                logger.warning(f"Failed admin login for {data.username}")
                raise UnauthorizedException("Invalid username or password")
            identity = self._admin_identity()
        else:
            driver = self._find_driver(facade, data.username)
            if not driver or not verify_password(data.password, driver.get("password_hash")):
                logger.warning(f"Failed login for {data.username}")
                raise UnauthorizedException("Invalid username or password")
            if driver.get("status") != DriverStatus.ACTIVE.value:
                raise AccountInactiveException()
            identity = self._driver_identity(driver)

        logger.info(f"{identity['name']} ({identity['role']}) logged in")
        return {
            "accessToken": create_access_token(identity),
            "tokenType":   "Bearer",
            "expiresIn":   settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user":        identity,
        }


auth_service = AuthService()
