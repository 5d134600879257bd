import datetime
import secrets
from typing import Optional

import jwt
from jwt import (
    DecodeError,
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidTokenError,
)
from passlib.context import CryptContext

from application_service.domain.entities import Identity, User
from application_service.domain.exceptions import Unauthorized


class SecurityService:
    def __init__(self, config):
        self.config = config
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=config.BCRYPT_ROUNDS,
        )

    def verify_password(self, plain_password, hashed_password):
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password):
        return self.pwd_context.hash(password)

    def create_access_token(
        self, user: User, expires_delta: Optional[datetime.timedelta] = None
    ):
        to_encode = {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "isDriver": user.is_driver,
            "isPassenger": user.is_passenger,
            "nonce": secrets.token_hex(8),
        }
        if expires_delta is None:
            expires_delta = datetime.timedelta(
                minutes=self.config.ACCESS_TOKEN_EXPIRE_MINUTES
            )
        expire = datetime.datetime.now(datetime.timezone.utc) + expires_delta
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(
            to_encode, self.config.JWT_SECRET, algorithm=self.config.JWT_ALGORITHM
        )
        return encoded_jwt, expire

    def decode_identity(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token, self.config.JWT_SECRET, algorithms=[self.config.JWT_ALGORITHM]
            )
        except ExpiredSignatureError:
            raise Unauthorized(
                "Token expirado",
                "Token expired",
                hint="Faça login novamente para obter um novo token",
            )
        except ImmatureSignatureError:
            raise Unauthorized(
                "Token ainda não é válido",
                "Token not active",
                hint="Token ainda não pode ser usado",
            )
        except DecodeError:
            # covers InvalidSignatureError
            raise Unauthorized(
                "Token inválido",
                "Invalid token",
                hint="Verifique se o token está correto",
            )
        except InvalidTokenError as e:
            raise Unauthorized(
                "Erro de autenticação",
                str(e),
                hint="Verifique se o token está correto e não expirou",
            )

        try:
            user_id = int(payload.get("id", payload.get("userId")))
        except (TypeError, ValueError):
            raise Unauthorized(
                "Token inválido",
                "Invalid token",
                hint="Verifique se o token está correto",
            )
        return Identity(
            id=user_id,
            email=payload.get("email"),
            name=payload.get("name") or payload.get("firstName"),
            is_driver=bool(payload.get("isDriver", False)),
            is_passenger=bool(payload.get("isPassenger", False)),
        )
