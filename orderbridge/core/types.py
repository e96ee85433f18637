from typing import Dict

FlatRecord = Dict[str, str]
