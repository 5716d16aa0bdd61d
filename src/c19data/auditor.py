import abc
import logging
import typing

from datetime import timedelta
from stairval.notepad import Notepad

from .codec import decode
from .errors import DecodeError, interchange_type
from .formats import format_date
from .metric import Dataset, MetricRecord

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class PayloadAuditor(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def audit(self, value: typing.Any, notepad: Notepad) -> typing.Dict[str, Dataset]:
        # return the records that decoded cleanly; report everything else on the notepad
        raise NotImplementedError


class DefaultAuditor(PayloadAuditor):
    def __init__(self, check_gaps: bool = True):
        """
        - check_gaps=True : date gaps, repeats and reversals are logged as WARNINGS
        - check_gaps=False: only decode failures are reported
        """
        self.check_gaps = check_gaps

    def audit(self, value: typing.Any, notepad: Notepad) -> typing.Dict[str, Dataset]:
        """
        Process:
        1) require a top-level object of named datasets
        2) decode each record, skipping and reporting the ones that fail
        3) optionally flag irregular date sequences (records are never altered)
        4) return the surviving records per dataset, in input order
        """
        if not isinstance(value, dict):
            notepad.add_error(
                f"Payload: expected an object of named datasets, got {interchange_type(value)}"
            )
            return {}

        datasets: typing.Dict[str, Dataset] = {}
        for name, series in value.items():
            records = self.audit_dataset(name, series, notepad)
            if records is None:
                continue
            datasets[name] = records
            if self.check_gaps:
                self.check_date_sequence(name, records, notepad)

        logger.info(
            "Audited %d datasets, kept %d records",
            len(datasets),
            sum(len(records) for records in datasets.values()),
        )
        return datasets

    @staticmethod
    def audit_dataset(name: str, series: typing.Any, notepad: Notepad) -> typing.Optional[Dataset]:
        """
        Decode one named series. Returns None if the series is not an array at all,
        otherwise every record that decoded (possibly an empty tuple).
        """
        if not isinstance(series, list):
            notepad.add_error(f"Dataset {name!r}: expected an array, got {interchange_type(series)}")
            return None

        records: typing.List[MetricRecord] = []
        for index, item in enumerate(series):
            try:
                records.append(decode(item, MetricRecord))
            except DecodeError as e:
                e.at(f"[{index}]")
                notepad.add_error(f"Dataset {name!r}: {e}")
        return tuple(records)

    @staticmethod
    def check_date_sequence(name: str, records: Dataset, notepad: Notepad) -> None:
        """Warn about missing days, repeated days and reversed order."""
        for previous, current in zip(records, records[1:]):
            step = current.date - previous.date
            if step == _ONE_DAY:
                continue
            span = f"{format_date(previous.date)} -> {format_date(current.date)}"
            if step > _ONE_DAY:
                notepad.add_warning(
                    f"Dataset {name!r}: {step.days - 1} day(s) missing between {span}"
                )
            elif step.days == 0:
                notepad.add_warning(f"Dataset {name!r}: date repeated ({span})")
            else:
                notepad.add_warning(f"Dataset {name!r}: dates out of order ({span})")


def audit_collection(value: typing.Any, notepad: Notepad) -> typing.Dict[str, Dataset]:
    """Lenient counterpart of codec.decode_collection; see DefaultAuditor.audit."""
    return DefaultAuditor().audit(value, notepad)
