"""
Errores del núcleo de convergencia.

El core solo define excepciones; las capas (CLI/API) se encargan del formato de salida.
"""


class ConvergeError(Exception):
    """Error base de converge."""
    pass


class ValidationError(ConvergeError):
    """Error de validación de configuración o modelos."""
    pass


class ConfigError(ConvergeError):
    """Error de configuración (archivo faltante, formato inválido)."""
    pass


class ProviderError(ConvergeError):
    """Error delegado desde un provider (file, env, remote_file)."""
    pass


class InvalidSpecification(ValidationError, ValueError):
    """Atributo declarado con un tipo inesperado (owner, group, mode...). No se reintenta."""
    pass


class IdentityNotFound(ProviderError):
    """
    Owner o group simbólico que no existe en el sistema.

    Se detecta al calcular el uid/gid pero solo se lanza en la fase de requisitos.
    """

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        label = "user" if kind == "user" else "group"
        super().__init__(
            f"cannot determine {label} id for '{name}', does the {label} exist on this system?"
        )


class VariableNotFound(ProviderError):
    """Se pidió modify sobre una variable de entorno que no existe."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot modify env[{name}] - key does not exist!")
