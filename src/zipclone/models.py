from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class CloneOptions(BaseModel):
    """
    Options accepted by :func:`zipclone.configure`.

    The legacy option names (``clone``, ``subclass_zip_file``, ``subclass_entry``,
    ``events_intercept``) are accepted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, extra="forbid")

    copy_namespace: bool = Field(
        default=True,
        validation_alias=AliasChoices("copy_namespace", "clone"),
    )
    retype_container: bool = Field(
        default=False,
        validation_alias=AliasChoices("retype_container", "subclass_zip_file"),
    )
    retype_payload_item: bool = Field(
        default=False,
        validation_alias=AliasChoices("retype_payload_item", "subclass_entry"),
    )
    enable_event_relabel_infrastructure: bool = Field(
        default=False,
        validation_alias=AliasChoices("enable_event_relabel_infrastructure", "events_intercept"),
    )
    container_type: type | None = None
    item_type: type | None = None

    @model_validator(mode="after")
    def apply_implications(self) -> "CloneOptions":
        # Interception is only ever installed on an owned container subtype.
        # Implied values stay out of ``model_fields_set``.
        explicit = set(self.model_fields_set)
        if self.item_type is not None:
            self.retype_payload_item = True
        if self.retype_payload_item:
            self.enable_event_relabel_infrastructure = True
        if self.container_type is not None or self.enable_event_relabel_infrastructure:
            self.retype_container = True
        self.__pydantic_fields_set__.intersection_update(explicit)
        return self
