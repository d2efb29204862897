"""Shared TCX fixtures.

SAMPLE_TCX holds two activities in the usual Garmin layout: default
TrainingCenterDatabase namespace, power under the ns3 ActivityExtension
prefix in the first activity and un-prefixed in the second.
"""

import matplotlib
import pytest

matplotlib.use("Agg")

TCX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<TrainingCenterDatabase xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2" '
    'xmlns:ns3="http://www.garmin.com/xmlschemas/ActivityExtension/v2">\n'
)


def trackpoint(time, lat, lon, hr=None, watts=None, tpx="ns3:"):
    hr_xml = f"<HeartRateBpm><Value>{hr}</Value></HeartRateBpm>" if hr is not None else ""
    ext_xml = ""
    if watts is not None:
        ext_xml = f"<Extensions><{tpx}TPX><{tpx}Watts>{watts}</{tpx}Watts></{tpx}TPX></Extensions>"
    return (
        f"<Trackpoint><Time>{time}</Time>"
        f"<Position><LatitudeDegrees>{lat}</LatitudeDegrees><LongitudeDegrees>{lon}</LongitudeDegrees></Position>"
        f"{hr_xml}{ext_xml}</Trackpoint>"
    )


def lap(seconds, meters, avg_hr, max_hr, trackpoints):
    return (
        f"<Lap><TotalTimeSeconds>{seconds}</TotalTimeSeconds><DistanceMeters>{meters}</DistanceMeters>"
        f"<AverageHeartRateBpm><Value>{avg_hr}</Value></AverageHeartRateBpm>"
        f"<MaximumHeartRateBpm><Value>{max_hr}</Value></MaximumHeartRateBpm>"
        f"<Track>{''.join(trackpoints)}</Track></Lap>"
    )


def activity(sport, laps, activity_id=None):
    sport_attr = f' Sport="{sport}"' if sport else ""
    id_xml = f"<Id>{activity_id}</Id>" if activity_id else ""
    return f"<Activity{sport_attr}>{id_xml}{''.join(laps)}</Activity>"


def tcx_document(*activities):
    return TCX_HEADER + "<Activities>" + "".join(activities) + "</Activities></TrainingCenterDatabase>"


SAMPLE_TCX = tcx_document(
    activity("Running", [
        lap(600, 1500, 150, 170, [
            trackpoint("2024-04-14T07:36:13Z", 51.5, -0.12, hr=140, watts=100),
            trackpoint("2024-04-14T07:36:14Z", 51.5001, -0.1201, hr=145, watts=150),
        ]),
        lap(1200, 3000, 160, 175, [
            trackpoint("2024-04-14T07:46:13Z", 51.501, -0.121, hr=165, watts=200),
        ]),
    ], activity_id="2024-04-14T07:36:13.000Z"),
    activity("Biking", [
        lap(45, 250.5, 120, 130, [
            trackpoint("2024-04-15T18:00:00Z", 48.85, 2.35, hr=120, watts=180, tpx=""),
        ]),
    ], activity_id="2024-04-15T18:00:00.000Z"),
)

EMPTY_TCX = tcx_document()


@pytest.fixture
def sample_tcx():
    return SAMPLE_TCX


@pytest.fixture
def empty_tcx():
    return EMPTY_TCX


@pytest.fixture
def sample_tcx_file(tmp_path):
    path = tmp_path / "morning_run.tcx"
    path.write_text(SAMPLE_TCX, encoding="utf-8")
    return path
