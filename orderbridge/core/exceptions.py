class MappingError(ValueError):
    pass
