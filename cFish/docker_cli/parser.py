import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from cFish.exceptions import DecodeError, TimeParseError
from cFish.formatter import format_relative_time, parse_docker_time
from cFish.models import ContainerRecord

DELIMITER = "|||"

# Field order of the delimited layout, matching the keys `docker ps --format '{{json .}}'` prints
FIELDS = ["ID", "Image", "Command", "CreatedAt", "Status", "Ports", "Names"]

JSON_FORMAT = "{{json .}}"
DELIMITED_FORMAT = DELIMITER.join(f"{{{{.{field}}}}}" for field in FIELDS)

LIST_FORMATS = {
    'json': JSON_FORMAT,
    'delimited': DELIMITED_FORMAT,
}


def decode_json_line(line: str) -> Dict[str, str]:
    try:
        raw = json.loads(line)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON ({e})", line) from e

    if not isinstance(raw, dict):
        raise DecodeError(f"Expected a JSON object, got {type(raw).__name__}", line)

    fields = {}
    for field in FIELDS:
        value = raw.get(field, '')
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise DecodeError(f"Field `{field}` is not a string", line)
        fields[field] = value
    return fields


def decode_delimited_line(line: str) -> Dict[str, str]:
    values = line.split(DELIMITER)
    if len(values) != len(FIELDS):
        raise DecodeError(f"Expected {len(FIELDS)} fields, got {len(values)}", line)
    return dict(zip(FIELDS, values))


DECODERS = {
    'json': decode_json_line,
    'delimited': decode_delimited_line,
}


def build_record(fields: Dict[str, str], now: datetime) -> ContainerRecord:
    """
    Builds a ContainerRecord from decoded fields. The creation time is rendered relative to `now`;
    when it cannot be parsed the raw value is kept and the record is still returned.
    """
    raw_created = fields['CreatedAt']
    created_at: Optional[datetime] = None
    created = raw_created
    try:
        created_at = parse_docker_time(raw_created)
    except TimeParseError as e:
        logging.debug(f"Parser - Keeping raw creation time for `{fields['ID']}` ({e})")
    else:
        created = format_relative_time(created_at, now)

    return ContainerRecord(
        id=fields['ID'],
        image=fields['Image'],
        command=fields['Command'],
        created_at=created_at,
        created=created,
        status=fields['Status'],
        ports=fields['Ports'],
        names=fields['Names'],
    )


def parse_line(line: str, output_format: str, now: datetime) -> ContainerRecord:
    """
    Decodes one line of listing output.

    :raises DecodeError: if the line is malformed or has no container ID
    """
    fields = DECODERS[output_format](line)
    if not fields['ID'].strip():
        raise DecodeError("Missing container ID", line)
    return build_record(fields, now)


def parse_listing(output: str, output_format: str = 'json', now: Optional[datetime] = None) -> List[ContainerRecord]:
    """
    Parses the full output of the list command. Malformed lines and repeated IDs are logged and skipped,
    the remaining lines are still parsed. Records keep the runtime's listing order.

    :param output: process output, one container per line
    :param output_format: `json` or `delimited`
    :param now: reference instant for the relative creation time, defaults to the current UTC time
    :return: list of ContainerRecord
    """
    if output_format not in DECODERS:
        raise ValueError(f"Unknown output format `{output_format}`")
    if now is None:
        now = datetime.now(timezone.utc)

    records: List[ContainerRecord] = []
    seen = set()
    for line in output.splitlines():
        if not line.strip():
            continue

        try:
            record = parse_line(line.strip(), output_format, now)
        except DecodeError as e:
            logging.warning(f"Parser - Skipping malformed line ({e}): {e.line[:200]}")
            continue

        if record.id in seen:
            logging.warning(f"Parser - Skipping duplicate container `{record.id}`")
            continue

        seen.add(record.id)
        records.append(record)

    return records
