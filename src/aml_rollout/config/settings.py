"""Rollout inputs."""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import MissingInputError

# Checked in this order before any remote call is made.
REQUIRED_INPUTS: List[str] = [
    "endpoint_name",
    "resource_group",
    "workspace_name",
    "model_name",
    "model_version",
    "traffic",
]

INPUT_LABELS: Dict[str, str] = {
    "endpoint_name": "Endpoint name",
    "resource_group": "Resource group",
    "workspace_name": "Workspace name",
    "registry_name": "Registry name",
    "registry_resource_group": "Registry resource group",
    "model_name": "Model name",
    "model_version": "Model version",
    "traffic": "Traffic",
    "deployment_yaml_file_path": "Deployment YAML file path",
}


class RolloutInputs(BaseSettings):
    """
    The nine inputs of a rollout.

    Values can be passed directly or read from ``INPUT_<NAME>`` environment
    variables, the convention GitHub Actions uses for step inputs. Blank
    strings are treated as absent.
    """

    endpoint_name: Optional[str] = Field(default=None, description="Online endpoint name")
    resource_group: Optional[str] = Field(default=None, description="Workspace resource group")
    workspace_name: Optional[str] = Field(default=None, description="Azure ML workspace name")
    registry_name: Optional[str] = Field(default=None, description="Model registry name")
    registry_resource_group: Optional[str] = Field(
        default=None, description="Resource group of the model registry"
    )
    model_name: Optional[str] = Field(default=None, description="Model name")
    model_version: Optional[str] = Field(default=None, description="Model version")
    traffic: Optional[str] = Field(default=None, description="Traffic map as JSON text")
    deployment_yaml_file_path: Optional[str] = Field(
        default=None, description="Path to the deployment YAML file"
    )

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty and whitespace-only strings as not provided."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @classmethod
    def from_env(cls) -> "RolloutInputs":
        """Load inputs from ``INPUT_*`` environment variables only."""
        return cls()

    @property
    def uses_registry(self) -> bool:
        return self.registry_name is not None

    def validate_required(self) -> None:
        """
        Ensure every required input is present.

        Raises:
            MissingInputError: For the first missing input, in declaration order
        """
        for name in REQUIRED_INPUTS:
            if not getattr(self, name):
                raise MissingInputError(f"{INPUT_LABELS[name]} is required.", name)

        if self.registry_name and not self.registry_resource_group:
            raise MissingInputError(
                "Registry resource group is required when a registry name is given.",
                "registry_resource_group",
            )

    def summary(self) -> Dict[str, Optional[str]]:
        """Return the inputs without the traffic JSON body."""
        return self.model_dump(exclude={"traffic"})
