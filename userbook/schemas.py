from pydantic import BaseModel


class ValidationResult(BaseModel):
    ok: bool
    msg: str = ""

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, msg: str) -> "ValidationResult":
        return cls(ok=False, msg=msg)
