from pydantic import BaseModel, ConfigDict

ROOT_DIRECTORY = "."


class StorageKey(BaseModel):
    """Value object identifying a stored file via directory+name."""

    directory: str = ROOT_DIRECTORY
    name: str

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        if self.directory == ROOT_DIRECTORY:
            return self.name
        return f"{self.directory}/{self.name}"
