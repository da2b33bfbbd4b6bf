"""Static vocabulary of the Pioneer line protocol.

Every table here is read-only. Mutable per-session data (input inventory,
tuner station names) lives in :mod:`pioneer.avr.state`.
"""

from types import MappingProxyType

from .enums import Zone

# Factory names of the input channels, keyed by two digit channel code.
DEFAULT_INPUT_NAMES = MappingProxyType(
    {
        "00": "phono",
        "01": "cd",
        "02": "tuner",
        "03": "cdrTape",
        "04": "dvd",
        "05": "tvSat",
        "06": "cblSat",
        "10": "video1",
        "12": "multiChIn",
        "13": "usbDac",
        "14": "video2",
        "15": "dvrBdr",
        "17": "iPodUsb",
        "18": "xmRadio",
        "19": "hdmi1",
        "20": "hdmi2",
        "21": "hdmi3",
        "22": "hdmi4",
        "23": "hdmi5",
        "24": "hdmi6",
        "25": "bd",
        "26": "homeMediaGallery",
        "27": "sirius",
        "31": "hdmiCyclic",
        "33": "adapterPort",
        "34": "hdmi7",
        "35": "hdmi8",
        "38": "internetRadio",
        "41": "pandora",
        "44": "mediaServer",
        "45": "favorites",
        "48": "mhl",
        "53": "spotify",
    }
)

INPUT_TUNER = "02"
INPUT_IPOD = "17"
INPUT_ADAPTER_PORT = "33"
INPUT_MHL = "48"
NETWORK_PLAYER_INPUTS = frozenset({"26", "27", "38", "41", "44", "45", "53"})
PLAYER_INPUTS = frozenset(
    {"13", "17", "18", "26", "27", "33", "38", "41", "44", "45", "48", "53"}
)
PLAYER_COMMANDS = (
    "play",
    "pause",
    "stop",
    "repeat",
    "shuffle",
    "prev",
    "next",
    "rev",
    "fwd",
    "up",
    "down",
    "right",
    "left",
    "enter",
    "return",
    "menu",
)
TUNER_COMMANDS = ("channelUp", "channelDown")

SPEAKER_SYSTEMS = MappingProxyType(
    {
        "10": "9.1ch FH/FW",
        "00": "Normal(SB/FH)",
        "01": "Normal(sb/FW)",
        "02": "Speaker B",
        "03": "Front Bi-Amp",
        "04": "ZONE 2",
        "11": "7.1ch + Speaker B",
        "12": "7.1ch Front Bi-Amp",
        "13": "7.1ch + ZONE2",
        "14": "7.1ch FH/FW + ZONE2",
        "15": "5.1ch Bi-Amp + ZONE2",
        "16": "5.1ch + ZONE 2+3",
        "17": "5.1ch + SP-B Bi-Amp",
        "18": "5.1ch F+Surr Bi-Amp",
        "19": "5.1ch F+C Bi-Amp",
        "20": "5.1ch C+Surr Bi-Amp",
    }
)

LISTENING_MODES = MappingProxyType(
    {
        "0001": "stereoCyclic",
        "0010": "standard",
        "0009": "stereoDirectSet",
        "0011": "2chSource",
        "0013": "proLogic2movie",
        "0018": "proLogic2xMovie",
        "0014": "proLogic2music",
        "0019": "proLogic2xMusic",
        "0015": "proLogic2game",
        "0020": "proLogic2xGame",
        "0031": "proLogic2zHeight",
        "0032": "wideSurroundMovie",
        "0033": "wideSurroundMusic",
        "0012": "proLogic",
        "0016": "neo6cinema",
        "0017": "neo6music",
        "0028": "xmHdSurround",
        "0029": "neuralSurround",
        "0037": "neoXcinema",
        "0038": "neoXmusic",
        "0039": "neoXgame",
        "0040": "neuralSurroundNeoXcinema",
        "0041": "neuralSurroundNeoXmusic",
        "0042": "neuralSurroundNeoXgame",
        "0021": "multiChSource",
        "0022": "multiChSourceDolbyEx",
        "0023": "multiChSourceProLogic2xMovie",
        "0024": "multiChSourceProLogic2xMusic",
        "0034": "multiChSourceProLogic2zHeight",
        "0035": "multiChSourceWideSurroundMovie",
        "0036": "multiChSourceWideSurroundMusic",
        "0025": "multiChSourceDtsEsNeo6",
        "0026": "multiChSourceDtsEsMatrix",
        "0027": "multiChSourceDtsEsDiscrete",
        "0030": "multiChSourceDtsEs8chDiscrete",
        "0043": "multiChSourceNeoXcinema",
        "0044": "multiChSourceNeoXmusic",
        "0045": "multiChSourceNeoXgame",
        "0100": "advancedSurroundCyclic",
        "0101": "action",
        "0103": "drama",
        "0102": "sciFi",
        "0105": "monoFilm",
        "0104": "entertainmentShow",
        "0106": "expandedTheater",
        "0116": "tvSurround",
        "0118": "advancedGame",
        "0117": "sports",
        "0107": "classical",
        "0110": "rockPop",
        "0109": "unplugged",
        "0112": "extendedStereo",
        "0003": "frontStageSurroundAdvanceFocus",
        "0004": "frontStageSurroundAdvanceWide",
        "0153": "retrieverAir",
        "0113": "phonesSurround",
        "0050": "thxCyclic",
        "0051": "prologicThxCinema",
        "0052": "pl2movieThxCinema",
        "0053": "neo6cinemaThxCinema",
        "0054": "pl2xMovieThxCinema",
        "0092": "pl2zHeightThxCinema",
        "0055": "thxSelect2games",
        "0068": "thxCinemaFor2ch",
        "0069": "thxMusicFor2ch",
        "0070": "thxGamesFor2ch",
        "0071": "pl2musicThxMusic",
        "0072": "pl2xMusicThxMusic",
        "0093": "pl2zHeightThxMusic",
        "0073": "neo6musicThxMusic",
        "0074": "pl2gameThxGames",
        "0075": "pl2xGameThxGames",
        "0094": "pl2zHeightThxGames",
        "0076": "thxUltra2games",
        "0077": "prologicThxMusic",
        "0078": "prologicThxGames",
        "0201": "neoXcinemaThxCinema",
        "0202": "neoXmusicThxMusic",
        "0203": "neoXgameThxGames",
        "0056": "thxCinemaForMultiCh",
        "0057": "thxSurroundExForMultiCh",
        "0058": "pl2xMovieThxCinemaForMultiCh",
        "0095": "pl2zHeightThxCinemaForMultiCh",
        "0059": "esNeo6thxCinemaForMultiCh",
        "0060": "esMatrixThxCinemaForMultiCh",
        "0061": "esDiscreteThxCinemaForMultiCh",
        "0067": "es8chDiscreteThxCinemaForMultiCh",
        "0062": "thxSelect2cinemaForMultiCh",
        "0063": "thxSelect2musicForMultiCh",
        "0064": "thxSelect2gamesForMultiCh",
        "0065": "thxUltra2cinemaForMultiCh",
        "0066": "thxUltra2musicForMultiCh",
        "0079": "thxUltra2gamesForMultiCh",
        "0080": "thxMusicForMultiCh",
        "0081": "thxGamesForMultiCh",
        "0082": "pl2xMusicThxMusicForMultiCh",
        "0096": "pl2zHeightThxMusicForMultiCh",
        "0083": "exThxGamesForMultiCh",
        "0097": "pl2zHeightThxGamesForMultiCh",
        "0084": "neo6thxMusicForMultiCh",
        "0085": "neo6thxGamesForMultiCh",
        "0086": "esMatrixThxMusicForMultiCh",
        "0087": "esMatrixThxGamesForMultiCh",
        "0088": "esDiscreteThxMusicForMultiCh",
        "0089": "esDiscreteThxGamesForMultiCh",
        "0090": "es8chDiscreteThxMusicForMultiCh",
        "0091": "es8chDiscreteThxGamesForMultiCh",
        "0204": "neoXcinemaThxCinemaForMultiCh",
        "0205": "neoXmusicThxMusicForMultiCh",
        "0206": "neoXgameThxGamesForMultiCh",
        "0005": "autoSurrStreamDirectCyclic",
        "0006": "autoSurround",
        "0151": "autoLevelControlAlC",
        "0007": "direct",
        "0008": "pureDirect",
        "0152": "optimumSurround",
    }
)

LISTENING_MODES_PLAYING = MappingProxyType(
    {
        "0101": "[)(]PLIIx MOVIE",
        "0102": "[)(]PLII MOVIE",
        "0103": "[)(]PLIIx MUSIC",
        "0104": "[)(]PLII MUSIC",
        "0105": "[)(]PLIIx GAME",
        "0106": "[)(]PLII GAME",
        "0107": "[)(]PROLOGIC",
        "0108": "Neo:6 CINEMA",
        "0109": "Neo:6 MUSIC",
        "010c": "2ch Straight Decode",
        "010d": "[)(]PLIIz HEIGHT",
        "010e": "WIDE SURR MOVIE",
        "010f": "WIDE SURR MUSIC",
        "0110": "STEREO",
        "0111": "Neo:X CINEMA",
        "0112": "Neo:X MUSIC",
        "0113": "Neo:X GAME",
        "1101": "[)(]PLIIx MOVIE",
        "1102": "[)(]PLIIx MUSIC",
        "1103": "[)(]DIGITAL EX",
        "1104": "DTS Neo:6",
        "1105": "ES MATRIX",
        "1106": "ES DISCRETE",
        "1107": "DTS-ES 8ch ",
        "1108": "multi ch Straight Decode",
        "1109": "[)(]PLIIz HEIGHT",
        "110a": "WIDE SURR MOVIE",
        "110b": "WIDE SURR MUSIC",
        "110c": "Neo:X CINEMA ",
        "110d": "Neo:X MUSIC",
        "110e": "Neo:X GAME",
        "0201": "ACTION",
        "0202": "DRAMA",
        "0208": "ADVANCEDGAME",
        "0209": "SPORTS",
        "020a": "CLASSICAL",
        "020b": "ROCK/POP",
        "020d": "EXT.STEREO",
        "020e": "PHONES SURR.",
        "020f": "FRONT STAGE SURROUND ADVANCE",
        "0211": "SOUND RETRIEVER AIR",
        "0212": "ECO MODE 1",
        "0213": "ECO MODE 2",
        "0301": "[)(]PLIIx MOVIE +THX",
        "0302": "[)(]PLII MOVIE +THX",
        "0303": "[)(]PL +THX CINEMA",
        "0305": "THX CINEMA",
        "0306": "[)(]PLIIx MUSIC +THX",
        "0307": "[)(]PLII MUSIC +THX",
        "0308": "[)(]PL +THX MUSIC",
        "030a": "THX MUSIC",
        "030b": "[)(]PLIIx GAME +THX",
        "030c": "[)(]PLII GAME +THX",
        "030d": "[)(]PL +THX GAMES",
        "0310": "THX GAMES",
        "0311": "[)(]PLIIz +THX CINEMA",
        "0312": "[)(]PLIIz +THX MUSIC",
        "0313": "[)(]PLIIz +THX GAMES",
        "0314": "Neo:X CINEMA + THX CINEMA",
        "0315": "Neo:X MUSIC + THX MUSIC",
        "0316": "Neo:X GAMES + THX GAMES",
        "1301": "THX Surr EX",
        "1303": "ES MTRX +THX CINEMA",
        "1304": "ES DISC +THX CINEMA",
        "1305": "ES 8ch +THX CINEMA ",
        "1306": "[)(]PLIIx MOVIE +THX",
        "1309": "THX CINEMA",
        "130b": "ES MTRX +THX MUSIC",
        "130c": "ES DISC +THX MUSIC",
        "130d": "ES 8ch +THX MUSIC",
        "130e": "[)(]PLIIx MUSIC +THX",
        "1311": "THX MUSIC",
        "1313": "ES MTRX +THX GAMES",
        "1314": "ES DISC +THX GAMES",
        "1315": "ES 8ch +THX GAMES",
        "1319": "THX GAMES",
        "131a": "[)(]PLIIz +THX CINEMA",
        "131b": "[)(]PLIIz +THX MUSIC",
        "131c": "[)(]PLIIz +THX GAMES",
        "131d": "Neo:X CINEMA + THX CINEMA",
        "131e": "Neo:X MUSIC + THX MUSIC",
        "131f": "Neo:X GAME + THX GAMES",
        "0401": "STEREO",
        "0402": "[)(]PLII MOVIE",
        "0403": "[)(]PLIIx MOVIE",
        "0405": "AUTO SURROUND Straight Decode",
        "0406": "[)(]DIGITAL EX",
        "0407": "[)(]PLIIx MOVIE",
        "0408": "DTS +Neo:6",
        "0409": "ES MATRIX",
        "040a": "ES DISCRETE",
        "040b": "DTS-ES 8ch ",
        "040e": "RETRIEVER AIR",
        "040f": "Neo:X CINEMA",
        "0501": "STEREO",
        "0502": "[)(]PLII MOVIE",
        "0503": "[)(]PLIIx MOVIE",
        "0504": "DTS/DTS-HD",
        "0505": "ALC Straight Decode",
        "0506": "[)(]DIGITAL EX",
        "0507": "[)(]PLIIx MOVIE",
        "0508": "DTS +Neo:6",
        "0509": "ES MATRIX",
        "050a": "ES DISCRETE",
        "050b": "DTS-ES 8ch ",
        "050e": "RETRIEVER AIR",
        "050f": "Neo:X CINEMA",
        "0601": "STEREO",
        "0602": "[)(]PLII MOVIE",
        "0603": "[)(]PLIIx MOVIE",
        "0605": "STREAM DIRECT NORMAL Straight Decode",
        "0606": "[)(]DIGITAL EX",
        "0607": "[)(]PLIIx MOVIE",
        "0609": "ES MATRIX",
        "060a": "ES DISCRETE",
        "060b": "DTS-ES 8ch ",
        "060c": "Neo:X CINEMA",
        "0701": "STREAM DIRECT PURE 2ch",
        "0702": "[)(]PLII MOVIE",
        "0703": "[)(]PLIIx MOVIE",
        "0704": "Neo:6 CINEMA",
        "0705": "STREAM DIRECT PURE Straight Decode",
        "0706": "[)(]DIGITAL EX",
        "0707": "[)(]PLIIx MOVIE",
        "0708": "(nothing)",
        "0709": "ES MATRIX",
        "070a": "ES DISCRETE",
        "070b": "DTS-ES 8ch ",
        "070c": "Neo:X CINEMA",
        "0881": "OPTIMUM",
        "0e01": "HDMI THROUGH",
        "0f01": "MULTI CH IN",
    }
)

# Semantic labels of the ``GEH``/``GEI`` display lines. The labels double
# as reading names, so an input change can blank all of them.
LINE_DATA_TYPES = MappingProxyType(
    {
        "00": "normal",
        "01": "directory",
        "02": "music",
        "03": "photo",
        "04": "video",
        "05": "nowPlaying",
        "20": "currentTrack",
        "21": "currentArtist",
        "22": "currentAlbum",
        "23": "time",
        "24": "genre",
        "25": "currentChapterNumber",
        "26": "format",
        "27": "bitPerSample",
        "28": "currentSamplingRate",
        "29": "currentBitrate",
        "32": "currentChannel",
        "31": "buffer",
        "33": "station",
    }
)

AUDIO_TERMINALS = MappingProxyType(
    {
        "00": "No Assign",
        "01": "COAX 1",
        "02": "COAX 2",
        "03": "COAX 3",
        "04": "OPT 1",
        "05": "OPT 2",
        "06": "OPT 3",
        "10": "ANALOG",
    }
)

SIGNAL_SELECT = MappingProxyType(
    {"0": "auto", "1": "analog", "2": "digital", "3": "hdmi", "9": "cyclic"}
)

SPEAKERS = MappingProxyType({"0": "off", "1": "A", "2": "B", "3": "A+B"})

SETS = MappingProxyType(
    {
        Zone.MAIN: MappingProxyType(
            {
                "on": "PO",
                "off": "PF",
                "toggle": "PZ",
                "volumeUp": "VU",
                "volumeDown": "VD",
                "volume": "VL",
                "muteOn": "MO",
                "muteOff": "MF",
                "muteToggle": "MZ",
                "bassUp": "BI",
                "bassDown": "BD",
                "trebleUp": "TI",
                "trebleDown": "TD",
                "input": "FN",
                "inputUp": "FU",
                "inputDown": "FD",
                "channelUp": "TPI",
                "channelDown": "TPD",
                "0Network": "00NW",
                "1Network": "01NW",
                "2Network": "02NW",
                "3Network": "03NW",
                "4Network": "04NW",
                "5Network": "05NW",
                "6Network": "06NW",
                "7Network": "07NW",
                "8Network": "08NW",
                "9Network": "09NW",
                "prevNetwork": "12NW",
                "nextNetwork": "13NW",
                "revNetwork": "14NW",
                "fwdNetwork": "15NW",
                "upNetwork": "26NW",
                "downNetwork": "27NW",
                "rightNetwork": "28NW",
                "leftNetwork": "29NW",
                "enterNetwork": "30NW",
                "returnNetwork": "31NW",
                "menuNetwork": "36NW",
                "playNetwork": "10NW",
                "pauseNetwork": "11NW",
                "stopNetwork": "20NW",
                "repeatNetwork": "34NW",
                "shuffleNetwork": "35NW",
                "playIpod": "00IP",
                "pauseIpod": "01IP",
                "stopIpod": "02IP",
                "repeatIpod": "07IP",
                "shuffleIpod": "08IP",
                "prevIpod": "03IP",
                "nextIpod": "04IP",
                "revIpod": "05IP",
                "fwdIpod": "06IP",
                "upIpod": "13IP",
                "downIpod": "14IP",
                "rightIpod": "15IP",
                "leftIpod": "16IP",
                "enterIpod": "17IP",
                "returnIpod": "18IP",
                "menuIpod": "19IP",
                "playAdapterPort": "10BT",
                "pauseAdapterPort": "11BT",
                "stopAdapterPort": "12BT",
                "repeatAdapterPort": "17BT",
                "shuffleAdapterPort": "18BT",
                "prevAdapterPort": "13BT",
                "nextAdapterPort": "14BT",
                "revAdapterPort": "15BT",
                "fwdAdapterPort": "16BT",
                "upAdapterPort": "21BT",
                "downAdapterPort": "22BT",
                "rightAdapterPort": "23BT",
                "leftAdapterPort": "24BT",
                "enterAdapterPort": "25BT",
                "returnAdapterPort": "26BT",
                "menuAdapterPort": "27BT",
                "playMhl": "23MHL",
                "pauseMhl": "25MHL",
                "stopMhl": "24MHL",
                "0Mhl": "07MHL",
                "1Mhl": "08MHL",
                "2Mhl": "09MHL",
                "3Mhl": "10MHL",
                "4Mhl": "11MHL",
                "5Mhl": "12MHL",
                "6Mhl": "13MHL",
                "7Mhl": "14MHL",
                "8Mhl": "15MHL",
                "9Mhl": "16MHL",
                "prevMhl": "31MHL",
                "nextMhl": "30MHL",
                "revMhl": "27MHL",
                "fwdMhl": "28MHL",
                "upMhl": "01MHL",
                "downMhl": "02MHL",
                "rightMhl": "04MHL",
                "leftMhl": "03MHL",
                "enterMhl": "17MHL",
                "returnMhl": "06MHL",
                "menuMhl": "05MHL",
            }
        ),
        Zone.ZONE2: MappingProxyType(
            {
                "on": "APO",
                "off": "APF",
                "toggle": "APZ",
                "volumeUp": "ZU",
                "volumeDown": "ZD",
                "muteOn": "Z2MO",
                "muteOff": "Z2MF",
                "muteToggle": "Z2MZ",
                "inputUp": "ZSFU",
                "inputDown": "ZSFD",
            }
        ),
        Zone.ZONE3: MappingProxyType(
            {
                "on": "BPO",
                "off": "BPF",
                "toggle": "BPZ",
                "volumeUp": "YU",
                "volumeDown": "YD",
                "muteOn": "Z3MO",
                "muteOff": "Z3MF",
                "muteToggle": "Z3MZ",
                "inputUp": "ZTFU",
                "inputDown": "ZTFD",
            }
        ),
        Zone.HDZONE: MappingProxyType(
            {
                "on": "ZEO",
                "off": "ZEF",
                "toggle": "ZEZ",
                "inputUp": "ZEC",
                "inputDown": "ZEB",
            }
        ),
    }
)

GETS = MappingProxyType(
    {
        Zone.MAIN: MappingProxyType(
            {
                "bass": "?BA",
                "channel": "?PR",
                "currentListIpod": "?GAI",
                "currentListNetwork": "?GAH",
                "display": "?FL",
                "input": "?F",
                "listeningMode": "?S",
                "listeningModePlaying": "?L",
                "macAddress": "?SVB",
                "model": "?RGD",
                "mute": "?M",
                "networkPorts": "?SUM",
                "networkSettings": "?SUL",
                "networkStandby": "?STJ",
                "power": "?P",
                "signalSelect": "?DSA",
                "softwareVersion": "?SSI",
                "speakers": "?SPK",
                "speakerSystem": "?SSF",
                "tone": "?TO",
                "tunerFrequency": "?FR",
                "tunerChannelNames": "?TQ",
                "treble": "?TR",
                "volume": "?V",
            }
        ),
        Zone.ZONE2: MappingProxyType(
            {
                "bass": "?ZGB",
                "input": "?ZS",
                "mute": "?Z2M",
                "power": "?AP",
                "treble": "?ZGC",
                "volume": "?ZV",
            }
        ),
        Zone.ZONE3: MappingProxyType(
            {
                "input": "?ZT",
                "mute": "?Z3M",
                "power": "?BP",
                "volume": "?YV",
            }
        ),
        Zone.HDZONE: MappingProxyType(
            {
                "input": "?ZEA",
                "power": "?ZEP",
            }
        ),
    }
)

REMOTE_CONTROL = MappingProxyType(
    {
        "cursorUp": "CUP",
        "cursorDown": "CDN",
        "cursorRight": "CRI",
        "cursorLeft": "CLE",
        "cursorEnter": "CEN",
        "cursorReturn": "CRT",
        "statusDisplay": "STS",
        "audioParameter": "APA",
        "hdmiOutputParameter": "HPA",
        "videoParameter": "VPA",
        "homeMenu": "HM",
    }
)
