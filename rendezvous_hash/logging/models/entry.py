import msgspec

from .log_level import LogLevel


class Entry(msgspec.Struct, kw_only=True):
    """
    Base structured log entry.

    Subclasses add the fields they report and fix their level as a
    default. Rendering exposes every field by name, plus any caller
    supplied context such as timestamp or line number.
    """

    level: LogLevel
    message: str = ""
    tags: frozenset[str] = frozenset()

    def fields(self) -> dict[str, str | int | LogLevel | frozenset[str]]:
        return {name: getattr(self, name) for name in self.__struct_fields__}

    def to_template(
        self,
        template: str,
        context: dict[str, str | int] | None = None,
    ) -> str:
        values: dict[str, object] = self.fields()
        values["level"] = self.level.value
        values["tags"] = ",".join(sorted(self.tags))

        if context:
            values.update(context)

        return template.format(**values)
