noise_sources = {}


def register_noise_source(config_cls):
    """Decorator to register a noise source class with its config class."""
    def decorator(cls):
        noise_sources[config_cls.__name__] = cls
        return cls

    return decorator
