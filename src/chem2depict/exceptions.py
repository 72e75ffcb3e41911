# -------------------------
# Custom exception types
# -------------------------
class StructureError(Exception):
    """Base error"""
    pass

class StructureParseError(StructureError):
    """Input could not be read as the requested notation"""
    pass

class LayoutError(StructureError):
    """2D coordinate generation failed"""
    pass
