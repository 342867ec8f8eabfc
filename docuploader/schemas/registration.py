"""Registration payload: a user, the account they open, and their role."""

from docuploader.schemas.account import AccountRegistration
from docuploader.schemas.auth_group import AuthGroupCreate
from docuploader.schemas.base import CamelModel
from docuploader.schemas.user import UserCreate


class RegistrationRequest(CamelModel):
    """All three parts are required and validated before the workflow runs."""

    user: UserCreate
    account: AccountRegistration
    auth_group: AuthGroupCreate
