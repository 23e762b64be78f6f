"""
Business logic for user sign-up.

Sign-up is two sequential identity calls and is not transactional: when the
account is created but the password cannot be set, the account is left in
place without a usable password.
"""

from aws_lambda_powertools.metrics import MetricUnit

from registration.dal import IdentityProvider
from registration.dal.cognito_handler import IdentityError
from registration.handlers.utils.observability import logger, metrics, tracer
from registration.models.input import SignUpRequest


class RegistrationService:
    """Registers users in the identity provider."""

    def __init__(self, identity: IdentityProvider, user_pool_id: str):
        self.identity = identity
        self.user_pool_id = user_pool_id

    @tracer.capture_method
    def register_user(self, request: SignUpRequest) -> None:
        """
        Create the account, then assign its permanent password.

        Args:
            request: Validated sign-up request

        Raises:
            IdentityError: If either identity call fails
        """
        tracer.put_metadata("username", request.email)

        user = self.identity.create_user(
            user_pool_id=self.user_pool_id,
            username=request.email,
            attributes={'email': request.email, 'name': request.name},
            suppress_notification=True,
        )

        if user:
            try:
                self.identity.set_permanent_password(
                    user_pool_id=self.user_pool_id,
                    username=request.email,
                    password=request.password,
                )
            except IdentityError:
                metrics.add_metric(name="PartialRegistration", unit=MetricUnit.Count, value=1)
                logger.warning("User created without a usable password", extra={
                    "username": request.email,
                    "user_pool_id": self.user_pool_id,
                })
                raise

        metrics.add_metric(name="UserRegistered", unit=MetricUnit.Count, value=1)
        logger.info("User registration successful", extra={"username": request.email})
