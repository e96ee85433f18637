from typing import List, Dict, Optional, Sequence

import pandas as pd


class DataFrameBackend:
    def to_dataframe(self, rows: List[Dict[str, str]], columns: Optional[Sequence[str]] = None):
        raise NotImplementedError

    def concat(self, frames: List):
        raise NotImplementedError


class PandasBackend(DataFrameBackend):
    """Flat records as a string-typed frame; missing cells become ""."""

    def to_dataframe(self, rows: List[Dict[str, str]], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        df = pd.DataFrame(rows, columns=list(columns) if columns else None)
        return df.fillna("").astype(str)

    def concat(self, frames: List[pd.DataFrame]) -> pd.DataFrame:
        if not frames:
            return pd.DataFrame()
        return pd.concat(frames, ignore_index=True).fillna("")
