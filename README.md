# txtproc

Tools for the plain-text data files produced by survey and measurement
equipment. The package has no third-party dependencies.

- **Angle analysis.** Reads a folder of `.txt` files that hold
  `profile bin angle` rows. For each file it finds the profile with the
  largest angle difference between its lowest and highest bin, then picks the
  overall maximum across all files.
- **SEP adjustment tables.** Loads `longitude latitude adjustment` tables and
  looks up an adjustment either by exact coordinates or by inverse-distance
  interpolation from the two nearest points, measured by great-circle
  (haversine) distance.
- **Magnetometer data.** Converts `.sec` magnetometer files into
  tab-separated files of local time (UTC+8) and field magnitude, and merges a
  folder of data files in order of their line number.

## Installation

```
pip install .
```

Install the test tools as well with `pip install .[test]`, then run `pytest`.

## Command-line tools

```
magfield-process DIRECTORY
```

For every regular file in `DIRECTORY` whose name contains `.sec`, this writes a
matching `.txt` file in the same directory. A trailing `.sec` is replaced by
`.txt`; any other name gets `.txt` appended.

- The first 13 lines of each input file are skipped.
- Each data line becomes `MM/DD/YY HH:MM:SS<TAB>magnitude`; lines that cannot
  be parsed are skipped.
- The time is shifted from UTC to UTC+8, across day, month and year ends.
- The magnitude is `sqrt(x² + y² + z²)`.

It exits with status 1 when it is not given exactly one directory or the
directory cannot be read.

```
mergefiles [DIRECTORY]
```

This merges the regular files in `DIRECTORY` (default: the current directory)
into `merged_file.txt` there.

- Files are ordered by their line number, the 15th space-separated field of
  the second line.
- Files without such a field are left out.
- A first line that holds more letters than other visible characters counts
  as a header and is written only for the first file that has one; other
  first lines are always written.

Both commands can also be called from Python as `txtproc.magfield.main(argv)`
and `txtproc.mergefiles.main(argv)`; they return the exit status.

## Library use

### Scanning a folder

```python
from txtproc.scan import scan_txt_files, format_scan_result

files = scan_txt_files("data")
print(format_scan_result(files, "data"))
```

`scan_txt_files` returns `TxtFile` entries (name and size in KB), sorted by
name. It leaves out `angle_analysis_result.txt` and `max_angle_result.txt`
and raises `ScanError` if the folder cannot be opened.

`txtproc.reports.scan_report(folder_path)` does the same and returns a
`(report_text, status)` pair, with the failure message in both when the
folder cannot be read.

### Angle analysis

```python
from txtproc.angle_workflow import run_angle_analysis, format_angle_report

result = run_angle_analysis("data")
print(result.status)
print(format_angle_report(result))
```

This writes `angle_analysis_result.txt` into the folder, with the maximum
angle difference of each file, and, when one is found,
`max_angle_result.txt` with the global maximum. Files whose names contain
`result` or `output` are treated as results and not read as data.

`run_angle_analysis` takes two optional callables:

- `progress(fraction, message)` is called before each file, with the fraction
  of files reached (0 to 1).
- `cancel()` is checked before each file and every thousand lines; when it
  returns true the run stops with `OperationCancelled`.

The lower-level steps are also available:

- `txtproc.angle_parser`: `parse_angle_line`, `parse_angle_lines`,
  `parse_angle_file` (each profile as an `AngleRange`), `best_range` and
  `process_angle_files`. Errors are raised as `AngleAnalysisError`.
- `txtproc.max_finder`: `find_global_max`, which works on any iterable of
  report lines, and `find_global_max_from_analysis_result`, which reads and
  writes files and raises `MaxFinderError` on failure.
- `txtproc.lines.read_lines` yields the lines of a stream of any line length.

### SEP tables and interpolation

```python
from txtproc.sep import SepData

sep = SepData.load("grid.sep")
exact = sep.hash_table.lookup(121.5, 25.0)          # None if no exact point
nearby = sep.spatial_grid.lookup(121.5001, 25.0001)  # None if the table is empty
```

`SepData.load` reads `longitude latitude adjustment` lines; text after `;` is
a comment, and blank or malformed lines are skipped. Exact lookups match
coordinates within `1e-10`.

`txtproc.grid.SpatialGrid` can be used on its own: `add_point(longitude,
latitude, adjustment)` and `lookup(longitude, latitude)`. With one point it
returns that point's adjustment; with two or more it weights the two nearest
by inverse distance. `txtproc.grid.haversine_distance` gives the distance in
metres.

### Magnetometer files

`txtproc.magfield` offers `calculate_magnitude`, `convert_to_utc8`,
`convert_date_format`, `process_file` and `process_directory`.
`txtproc.mergefiles` offers `line_number_from_file`, `is_header_line` and
`merge_directory`.

## What the package does not do

- It does not parse tide rows or convert elevation files. The SEP loading and
  interpolation pieces are here, but nothing applies them to a data file.
- It has no interactive front end and no command for the angle analysis or
  the folder scan; those are used from Python as shown above.