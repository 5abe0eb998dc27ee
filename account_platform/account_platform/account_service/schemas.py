from pydantic import BaseModel


class Profile(BaseModel):
    name: str
    password: str

    def describe(self) -> str:
        return f"Your name is {self.name} and your password is {self.password}"


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class ReadinessResponse(BaseModel):
    status: str
    database: str
    timestamp: str
