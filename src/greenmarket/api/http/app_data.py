from dataclasses import dataclass

from src.greenmarket.core.services.database import DbSessionService
from src.greenmarket.core.services.jwt import (
    JwtGeneratorService,
    JwtVerificationService,
)
from src.greenmarket.core.services.mail import (
    VerificationMailer,
    build_verification_mailer,
)
from src.greenmarket.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    jwt_generation_service: JwtGeneratorService
    jwt_verify_service: JwtVerificationService
    mailer: VerificationMailer

    @classmethod
    def from_config(cls, config: ConfigData) -> "ApplicationDependencies":
        return cls(
            database_service=DbSessionService(
                config.database, config.app.environment
            ),
            jwt_generation_service=JwtGeneratorService(config.jwt),
            jwt_verify_service=JwtVerificationService(config.jwt),
            mailer=build_verification_mailer(config.mail),
        )

    def close(self) -> None:
        close_mailer = getattr(self.mailer, "close", None)
        if close_mailer is not None:
            close_mailer()
        self.database_service.dispose()
