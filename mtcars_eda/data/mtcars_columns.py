"""Column definitions for the Motor Trend car road tests table."""

from .base_columns import BaseColumn, ColumnMetadata


class MtcarsColumn(BaseColumn):
    """Column names for the Motor Trend car road tests data (1974 *Motor Trend* US magazine, 1973-74 models).

    Columns:
    - ``mpg``: float - Fuel economy in miles per (US) gallon (target variable)
    - ``cyl``: int - Number of cylinders (nominal: 4, 6, 8)
    - ``disp``: float - Displacement in cubic inches
    - ``hp``: float - Gross horsepower
    - ``drat``: float - Rear axle ratio
    - ``wt``: float - Weight in 1000 lbs
    - ``qsec``: float - Quarter mile time in seconds
    - ``vs``: int - Engine shape (nominal: 0 = V-shaped, 1 = straight)
    - ``am``: int - Transmission (nominal: 0 = automatic, 1 = manual)
    - ``gear``: int - Number of forward gears (nominal: 3, 4, 5)
    - ``carb``: int - Number of carburetors (nominal: 1, 2, 3, 4, 6, 8)
    - ``cluster``: category - k-means cluster label appended during analysis
    """

    # Target variable
    TARGET = "mpg"
    """Miles per (US) gallon (target variable)."""
    MPG = TARGET

    # Engine
    CYL = "cyl"
    """Number of cylinders."""
    DISP = "disp"
    """Displacement (cu. in.)."""
    HP = "hp"
    """Gross horsepower."""
    VS = "vs"
    """Engine shape (0 = V-shaped, 1 = straight)."""
    CARB = "carb"
    """Number of carburetors."""

    # Drivetrain
    DRAT = "drat"
    """Rear axle ratio."""
    AM = "am"
    """Transmission (0 = automatic, 1 = manual)."""
    GEAR = "gear"
    """Number of forward gears."""

    # Body and performance
    WT = "wt"
    """Weight (1000 lbs)."""
    QSEC = "qsec"
    """1/4 mile time (s)."""

    # Derived
    CLUSTER = "cluster"
    """k-means cluster label."""

    # Row identifier (index name)
    MODEL = "model"
    """Car model name."""

    def metadata(self) -> ColumnMetadata:
        return _COLUMN_METADATA_MTCARS[self]

    @classmethod
    def base_columns(cls) -> list[str]:
        """Get the 11 measured columns in their canonical order."""
        return [
            cls.MPG,
            cls.CYL,
            cls.DISP,
            cls.HP,
            cls.DRAT,
            cls.WT,
            cls.QSEC,
            cls.VS,
            cls.AM,
            cls.GEAR,
            cls.CARB,
        ]

    @classmethod
    def identifier_columns(cls) -> list[str]:
        return [cls.MODEL]


_COLUMN_METADATA_MTCARS: dict[MtcarsColumn, ColumnMetadata] = {
    MtcarsColumn.TARGET: ColumnMetadata(
        original_name="mpg",
        cleaned_name="mpg",
        dtype="float64",
        pretty_name="Miles per Gallon",
    ),
    MtcarsColumn.CYL: ColumnMetadata(
        original_name="cyl",
        cleaned_name="cyl",
        dtype="int64",
        pretty_name="Cylinders",
        is_nominal=True,
    ),
    MtcarsColumn.DISP: ColumnMetadata(
        original_name="disp",
        cleaned_name="disp",
        dtype="float64",
        pretty_name="Displacement (cu. in.)",
    ),
    MtcarsColumn.HP: ColumnMetadata(
        original_name="hp",
        cleaned_name="hp",
        dtype="float64",
        pretty_name="Gross Horsepower",
    ),
    MtcarsColumn.DRAT: ColumnMetadata(
        original_name="drat",
        cleaned_name="drat",
        dtype="float64",
        pretty_name="Rear Axle Ratio",
    ),
    MtcarsColumn.WT: ColumnMetadata(
        original_name="wt",
        cleaned_name="wt",
        dtype="float64",
        pretty_name="Weight (1000 lbs)",
    ),
    MtcarsColumn.QSEC: ColumnMetadata(
        original_name="qsec",
        cleaned_name="qsec",
        dtype="float64",
        pretty_name="1/4 Mile Time (s)",
    ),
    MtcarsColumn.VS: ColumnMetadata(
        original_name="vs",
        cleaned_name="vs",
        dtype="int64",
        pretty_name="Engine Shape (0 = V, 1 = Straight)",
        is_nominal=True,
    ),
    MtcarsColumn.AM: ColumnMetadata(
        original_name="am",
        cleaned_name="am",
        dtype="int64",
        pretty_name="Transmission (0 = Auto, 1 = Manual)",
        is_nominal=True,
    ),
    MtcarsColumn.GEAR: ColumnMetadata(
        original_name="gear",
        cleaned_name="gear",
        dtype="int64",
        pretty_name="Forward Gears",
        is_nominal=True,
    ),
    MtcarsColumn.CARB: ColumnMetadata(
        original_name="carb",
        cleaned_name="carb",
        dtype="int64",
        pretty_name="Carburetors",
        is_nominal=True,
    ),
    MtcarsColumn.CLUSTER: ColumnMetadata(
        original_name="cluster",
        cleaned_name="cluster",
        dtype="category",
        pretty_name="Cluster",
        is_nominal=True,
    ),
    MtcarsColumn.MODEL: ColumnMetadata(
        original_name="model",
        cleaned_name="model",
        dtype="str",
        pretty_name="Car Model",
    ),
}
