from src.crudwizard.services.auth_service import AuthService, EmailAlreadyRegisteredError

__all__ = ["AuthService", "EmailAlreadyRegisteredError"]
