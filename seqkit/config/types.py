from dataclasses import dataclass, field


@dataclass
class RunConfig:
    commands: list[str]
    stop_on_error: bool = True
    env: dict[str, str] = field(default_factory=dict)
    working_dir: str | None = None

    def __iter__(self):
        yield from self.commands

    def __len__(self):
        return len(self.commands)


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
