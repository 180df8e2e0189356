"""Alaska marine regions, zones and their NOAA bulletin sources."""

from dataclasses import dataclass

TGFTP_FZ = "https://tgftp.nws.noaa.gov/data/raw/fz"

# Alaska Regional HQ land zone forecast; covers the coastal AKZ zones.
LAND_FORECAST_URL = f"{TGFTP_FZ}/fzak61.parh.zfp.arh.txt"


@dataclass(frozen=True)
class MarineRegion:
    code: str
    name: str
    bulletin_url: str
    zones: dict[str, str]


MARINE_REGIONS: list[MarineRegion] = [
    MarineRegion(
        code="CWFAJK",
        name="Southeast Alaska Inner Coastal Waters",
        bulletin_url=f"{TGFTP_FZ}/fzak51.pajk.cwf.ajk.txt",
        zones={
            "PKZ098": "Taku Inlet",
            "PKZ011": "Glacier Bay",
            "PKZ012": "Northern Lynn Canal",
            "PKZ013": "Southern Lynn Canal",
            "PKZ021": "Icy Strait",
            "PKZ022": "Cross Sound",
            "PKZ031": "Stephens Passage",
            "PKZ032": "Northern Chatham Strait",
            "PKZ033": "Southern Chatham Strait",
            "PKZ034": "Frederick Sound",
            "PKZ035": "Sumner Strait",
            "PKZ036": "Clarence Strait",
        },
    ),
    MarineRegion(
        code="CWFAEG",
        name="Southeast Alaska Outside Coastal Waters",
        bulletin_url=f"{TGFTP_FZ}/fzak52.pajk.cwf.aeg.txt",
        zones={
            "PKZ641": "Cape Fairweather to Icy Cape Inside",
            "PKZ661": "Cape Fairweather to Icy Cape Outside",
            "PKZ642": "Cape Spencer to Cape Fairweather Inside",
            "PKZ662": "Cape Spencer to Cape Fairweather Outside",
            "PKZ643": "Cape Edgecumbe to Cape Spencer Inside",
            "PKZ663": "Cape Edgecumbe to Cape Spencer Outside",
            "PKZ644": "Cape Decision to Cape Edgecumbe Inside",
            "PKZ664": "Cape Decision to Cape Edgecumbe Outside",
            "PKZ651": "Dixon Entrance to Cape Decision Inside",
            "PKZ671": "Dixon Entrance to Cape Decision Outside",
            "PKZ652": "Dixon Entrance to Cape Muzon Inside",
            "PKZ672": "Dixon Entrance to Cape Muzon Outside",
        },
    ),
    MarineRegion(
        code="CWFYAK",
        name="Yakutat Bay",
        bulletin_url=f"{TGFTP_FZ}/fzak53.pajk.cwf.yak.txt",
        zones={"PKZ053": "Yakutat Bay"},
    ),
    MarineRegion(
        code="CWFAER",
        name="North Gulf Coast, Kodiak and Cook Inlet",
        bulletin_url=f"{TGFTP_FZ}/fzak51.pafc.cwf.aer.txt",
        zones={
            "PKZ197": "Icy Cape to Cape Suckling",
            "PKZ710": "Prince William Sound",
            "PKZ711": "Cape Suckling to Gore Point",
            "PKZ712": "Valdez Arm",
            "PKZ715": "Resurrection Bay",
            "PKZ716": "Passage Canal",
            "PKZ714": "Port of Valdez",
            "PKZ724": "Cook Inlet Kalgin Island to Point Bede",
            "PKZ725": "Kamishak Bay",
            "PKZ726": "Cook Inlet North of Kalgin Island",
            "PKZ720": "Barren Islands East",
            "PKZ721": "Shelikof Strait",
            "PKZ722": "Marmot Bay",
            "PKZ723": "Kodiak Island North Side",
            "PKZ730": "Chiniak Bay",
            "PKZ731": "Kodiak Island East Side",
            "PKZ733": "Kodiak Island South Side",
            "PKZ732": "Sitkalidak Strait",
            "PKZ734": "Kodiak Island West Side",
            "PKZ736": "Alitak Bay",
            "PKZ737": "Uyak Bay",
            "PKZ738": "Kupreanof Strait",
            "PKZ742": "Gore Point to Cape Douglas",
            "PKZ740": "Castle Cape to Cape Sarichef",
            "PKZ741": "Sitkinak Strait",
        },
    ),
    MarineRegion(
        code="CWFALU",
        name="Southwest Alaska and the Aleutians",
        bulletin_url=f"{TGFTP_FZ}/fzak52.pafc.cwf.alu.txt",
        zones={
            "PKZ750": "Pribilof Islands Nearshore Waters",
            "PKZ751": "Castle Cape to Cape Sarichef Pacific",
            "PKZ752": "Unimak Pass",
            "PKZ753": "Cape Sarichef to Nikolski Bering Side",
            "PKZ754": "Sanak Island to Cape Sarichef",
            "PKZ755": "Nikolski to Seguam Bering Side",
            "PKZ756": "Nikolski to Seguam Pacific Side",
            "PKZ757": "Seguam to Adak Bering Side",
            "PKZ758": "Seguam to Adak Pacific Side",
            "PKZ759": "Kodiak to Shumagin Islands",
            "PKZ770": "Adak to Kiska Bering Side",
            "PKZ772": "Kiska to Attu",
            "PKZ771": "Adak to Kiska Pacific Side",
            "PKZ773": "Buldir Island",
            "PKZ774": "Port Heiden to Cape Sarichef",
            "PKZ775": "Bristol Bay",
            "PKZ776": "Cape Newenham to Cape Constantine",
            "PKZ777": "Kuskokwim Delta",
            "PKZ778": "Nunivak Island",
            "PKZ780": "Yukon Delta",
            "PKZ781": "Norton Sound",
            "PKZ782": "Bering Strait",
        },
    ),
]

COASTAL_ZONE_NAMES: dict[str, str] = {
    "AKZ317": "Northern Prince of Wales Island",
    "AKZ318": "Central Prince of Wales Island",
    "AKZ319": "Southern Prince of Wales Island",
    "AKZ320": "Misty Fjords",
    "AKZ321": "Coastal Yakutat",
    "AKZ322": "North Central Gulf Coast",
    "AKZ323": "South Central Gulf Coast",
    "AKZ324": "Kodiak Island",
    "AKZ325": "Alaska Peninsula Coast",
    "AKZ326": "Bristol Bay Coast",
    "AKZ327": "Lower Kuskokwim Valley",
    "AKZ328": "Middle Kuskokwim Valley",
    "AKZ329": "Upper Kuskokwim Valley",
    "AKZ330": "Western Alaska Coast",
    "AKZ331": "Northwest Arctic Coast",
    "AKZ332": "North Slope Coast",
}

MARINE_ZONE_URLS: dict[str, str] = {
    zone: region.bulletin_url
    for region in MARINE_REGIONS
    for zone in region.zones
}
MARINE_ZONE_URLS.update({zone: LAND_FORECAST_URL for zone in COASTAL_ZONE_NAMES})

REGIONS_BY_CODE: dict[str, MarineRegion] = {r.code: r for r in MARINE_REGIONS}


def zone_name(zone_id: str) -> str:
    """Human-readable name for a marine or coastal zone, or the id itself."""
    zone_id = zone_id.upper()
    if zone_id in COASTAL_ZONE_NAMES:
        return COASTAL_ZONE_NAMES[zone_id]
    for region in MARINE_REGIONS:
        if zone_id in region.zones:
            return region.zones[zone_id]
    return zone_id
