"""
Library Pattern Tables - Vendor Prefixes and Instrument Names

Reaticulate bank names start with a compressed vendor/library code
("SFBB", "8DAGE1", "EWHS", ...) followed by a free-form description.
This module holds the ordered rule tables the classifier walks:

    PREFIX_PATTERNS       code prefix → library folder
    LARGE_LIBRARIES       libraries that get a second, per-instrument level
    INSTRUMENT_PATTERNS   full instrument words at the start of the remainder
    ABBREVIATION_PATTERNS short instrument codes anywhere in the remainder

ORDER MATTERS in every table. The first matching rule wins, and prefixes
overlap on purpose: an exact code such as "8DAGE1" must come before the
"8D<anything>" catch-all of the same vendor. Keep new rules next to their
vendor and above that vendor's catch-all.
"""

from typing import List, Optional, Tuple
import re


# =============================================================================
# LIBRARY PREFIXES
# =============================================================================

_PREFIX_RULES = [
    # 8Dio specific libraries
    (r'^8DAGE1\s+', '8Dio Acoustic Grand Ensembles'),
    (r'^8DAGE2\s+', '8Dio Acoustic Grand Ensembles 2'),
    (r'^8DADS\s+', '8Dio Adagio Deep Strings'),
    (r'^8DAD2\s+', '8Dio Adagio Deep Strings 2'),
    (r'^8DA2N?\s+', '8Dio Adagio'),
    (r'^8DAB\s+', '8Dio Adagio Basses'),
    (r'^8DAGA\s+', '8Dio Agitato'),
    (r'^8DAGC\s+', '8Dio Agitato Cellos'),
    (r'^8DAGI\s+', '8Dio Agitato'),
    (r'^8DALA\s+', '8Dio Lacrimosa'),
    (r'^8DANT\s+', '8Dio Anthology'),
    (r'^8DAS\s+', '8Dio Adagio Strings'),
    (r'^8DC[A-Z0-9]*\s+', '8Dio Century'),
    (r'^8DDQS\s+', '8Dio Deep Quartet Strings'),
    (r'^8DEP\s+', '8Dio Epic'),
    (r'^8DFIS\s+', '8Dio Fiore Intimate Strings'),
    (r'^8DFIT\s+', '8Dio Fiore Intimate Tutti'),
    (r'^8DFT\s+', '8Dio Fire Toolkit'),
    (r'^8DFVC\s+', '8Dio Vocals'),
    (r'^8DF[A-Z0-9]*\s+', '8Dio'),
    (r'^8DINS\s+', '8Dio Insolidus'),
    (r'^8DI[A-Z0-9]*\s+', '8Dio Intimate'),
    (r'^8DLAC\s+', '8Dio Lacrimosa'),
    (r'^8DLI\s+', '8Dio Liberis'),
    (r'^8DL[A-Z0-9]*\s+', '8Dio Liberis'),
    (r'^8DMAJ\s+', '8Dio Majestica'),
    (r'^8DMJ[A-Z0-9]*\s+', '8Dio Majestica'),
    (r'^8DM[A-Z0-9]*\s+', '8Dio'),
    (r'^8DOBS\s+', '8Dio Ostinato Brass'),
    (r'^8DOWS\s+', '8Dio Ostinato Woodwinds'),
    (r'^8DO[A-Z0-9]*\s+', '8Dio'),
    (r'^8DQ[A-Z0-9]*\s+', '8Dio'),
    (r'^8DREP\s+', '8Dio Repertoire'),
    (r'^8DRQN\s+', '8Dio Requiem'),
    (r'^8DR[A-Z0-9]*\s+', '8Dio Requiem'),
    (r'^8DSIC\s+', '8Dio Silka'),
    (r'^8DSYS\s+', '8Dio Symphony'),
    (r'^8DSS[A-Z0-9]*\s+', '8Dio Studio Sopranos'),
    (r'^8DS[A-Z0-9]*\s+', '8Dio Studio'),
    (r'^8D[A-Z0-9]+\s+', '8Dio'),
    (r'^8S[A-Z0-9]*\s+', '8Dio'),

    # Spitfire
    (r'^SFBB[A-Z0-9]*\s+', 'Spitfire British Brass'),
    (r'^SFA[0-9]+\s+', 'Spitfire Albion'),
    (r'^SFAL[A-Z0-9]*\s+', 'Spitfire Albion'),
    (r'^SFSS[A-Z0-9]*\s+', 'Spitfire Studio Strings'),
    (r'^SFSW[A-Z0-9]*\s+', 'Spitfire Studio Woodwinds'),
    (r'^SFSB[A-Z0-9]*\s+', 'Spitfire Studio Brass'),
    (r'^SFCS[A-Z0-9]*\s+', 'Spitfire Chamber Strings'),
    (r'^SFSO[A-Z0-9]*\s+', 'Spitfire Symphony Orchestra'),
    (r'^SFOP[A-Z0-9]*\s+', 'Spitfire Originals'),
    (r'^SF[A-Z0-9]+\s+', 'Spitfire Audio'),

    # BBC Symphony Orchestra
    (r'^BBCSO\s+', 'BBC Symphony Orchestra'),

    # Cinematic Studio Series
    (r'^CSSS[0-9]*\s+', 'Cinematic Studio Strings'),
    (r'^CSST[0-9]*\s+', 'Cinematic Studio Strings'),
    (r'^CSSW[0-9]*\s+', 'Cinematic Studio Woodwinds'),
    (r'^CSSB[A-Z0-9]*\s+', 'Cinematic Studio Brass'),
    (r'^CSSO[A-Z0-9]*\s+', 'Cinematic Solo Strings'),
    (r'^CSCP[A-Z0-9]*\s+', 'Cinematic Studio Piano'),
    (r'^CSM[A-Z0-9]+\s+', 'Cinesamples'),
    (r'^CSS[A-Z0-9]*\s+', 'Cinematic Studio Series'),

    # Cinesamples
    (r'^CI[A-Z0-9]+\s+', 'Cinesamples'),

    # EastWest
    (r'^EWHF[A-Z0-9]+\s+', 'EW Hollywood Fantasy Orchestra'),
    (r'^EWHO[A-Z0-9]*\s+', 'EW Hollywood Orchestra'),
    (r'^EWHB[A-Z0-9]*\s+', 'EW Hollywood Brass'),
    (r'^EWHS[A-Z0-9]*\s+', 'EW Hollywood Strings'),
    (r'^EWHW[A-Z0-9]*\s+', 'EW Hollywood Woodwinds'),
    (r'^EWHH[A-Z0-9]*\s+', 'EW Hollywood Harp'),
    (r'^EWHC[A-Z0-9]*\s+', 'EW Hollywood Choirs'),
    (r'^EWHP[A-Z0-9]*\s+', 'EW Hollywood Percussion'),
    (r'^EWH[A-Z0-9]+\s+', 'EW Hollywood'),
    (r'^EWOH[A-Z0-9]+\s+', 'EW Hollywood Orchestra Opus'),
    (r'^EWOP[A-Z0-9]+\s+', 'EW Hollywood Orchestra Opus'),
    (r'^EWS[A-Z0-9]+\s+', 'EW Symphonic Orchestra'),
    (r'^EWVO[A-Z0-9]+\s+', 'EW Voices of'),
    (r'^EWVP[A-Z0-9]*\s+', 'EW'),
    (r'^EWMR[0-9A-Z]*\s+', 'EW Ministry of Rock'),
    (r'^EWRA[A-Z0-9]*\s+', 'EW RA'),
    (r'^EWG[A-Z0-9]+\s+', 'EW Goliath'),
    (r'^EWDB[A-Z0-9]*\s+', 'EW'),
    (r'^EWDS[A-Z0-9]*\s+', 'EW'),
    (r'^EWBA[A-Z0-9]*\s+', 'EW'),
    (r'^EWCO[A-Z0-9]*\s+', 'EW'),
    (r'^EW[A-Z0-9]+\s+', 'EastWest'),

    # Orchestral Tools
    (r'^OTMA[0-9]+[A-Z0-9]*\s+', 'OT Metropolis Ark'),
    (r'^OTBB[A-Z0-9]*\s+', 'OT Berlin Brass'),
    (r'^OTBS[A-Z0-9]*\s+', 'OT Berlin Strings'),
    (r'^OTBW[A-Z0-9]*\s+', 'OT Berlin Woodwinds'),
    (r'^OTSO[A-Z0-9]*\s+', 'OT Soloists'),
    (r'^OTSYS[A-Z0-9]*\s+', 'OT Symphonic'),
    (r'^OTI[0-9]+[A-Z0-9]*\s+', 'OT Inspire'),
    (r'^OT[A-Z0-9]+\s+', 'Orchestral Tools'),

    # Vienna Symphonic Library ("VSSYS" before the shorter "VSSY")
    (r'^VSBB[0-9]*\s+', 'VSL Big Bang Orchestra'),
    (r'^VSSYS[A-Z0-9]*\s+', 'VSL Synchron Strings'),
    (r'^VSSY[A-Z0-9]+\s+', 'VSL Synchron-ized'),
    (r'^VSSS[A-Z0-9]*\s+', 'VSL Synchron Strings'),
    (r'^VSS[A-Z0-9]+\s+', 'VSL Synchron'),
    (r'^VSE[0-9]+\s+', 'VSL SE'),
    (r'^VSY[A-Z0-9]+\s+', 'VSL Synchron'),
    (r'^VS[A-Z0-9]+\s+', 'Vienna Symphonic Library'),

    # Native Instruments
    (r'^NIK[0-9]+\s+', 'NI Kontakt'),
    (r'^NI[A-Z0-9]+\s+', 'Native Instruments'),

    # Audio Imperia
    (r'^AIAR[0-9]*[A-Z0-9]*\s+', 'AI Areia'),
    (r'^AINU[0-9]*[A-Z0-9]*\s+', 'AI Nucleus'),
    (r'^AIJG[0-9]+\s+', 'AI Jaeger'),
    (r'^AI[A-Z0-9]+\s+', 'Audio Imperia'),

    # Albion
    (r'^AB[A-Z0-9]+\s+', 'Spitfire Albion'),

    # ProjectSAM
    (r'^PS[A-Z0-9]+\s+', 'ProjectSAM'),

    # Strezov
    (r'^ST[A-Z0-9]+\s+', 'Strezov Sampling'),

    # Chris Hein
    (r'^CH[A-Z0-9]+\s+', 'Chris Hein'),

    # Sonuscore
    (r'^SO[A-Z0-9]+\s+', 'Sonuscore'),
    (r'^SN[A-Z0-9]+\s+', 'Sonuscore'),

    # Musical Sampling
    (r'^MS[A-Z0-9]+\s+', 'Musical Sampling'),

    # Audiobro
    (r'^AU[A-Z0-9]+\s+', 'Audiobro'),

    # Fluffy Audio
    (r'^FA[A-Z0-9]+\s+', 'Fluffy Audio'),

    # Fracture Sounds
    (r'^FR[A-Z0-9]+\s+', 'Fracture Sounds'),

    # Impact Soundworks
    (r'^IS[A-Z0-9]+\s+', 'Impact Soundworks'),
    (r'^IW[A-Z0-9]+\s+', 'Impact Soundworks'),

    # Sample Logic
    (r'^SL[A-Z0-9]+\s+', 'Sample Logic'),

    # Heavyocity
    (r'^HY[A-Z0-9]+\s+', 'Heavyocity'),

    # Embertone
    (r'^EM[A-Z0-9]+\s+', 'Embertone'),

    # Orchestral (generic "ORC"/"ORCH" before Orange Tree's "OR" catch-all)
    (r'^ORCH?\s+', 'Orchestral'),

    # Orange Tree Samples
    (r'^OR[A-Z0-9]+\s+', 'Orange Tree Samples'),

    # Spitfire LABS
    (r'^LABS\s+', 'Spitfire LABS'),

    # Keepforest
    (r'^KH[A-Z0-9]+\s+', 'Keepforest'),

    # Berlin (OT)
    (r'^BE[A-Z0-9]+\s+', 'OT Berlin'),

    # Aaron Venture
    (r'^AP[A-Z0-9]+\s+', 'Aaron Venture'),

    # Westgate
    (r'^WS[A-Z0-9]+\s+', 'Westgate'),

    # Performance Samples
    (r'^PL[A-Z0-9]+\s+', 'Performance Samples'),

    # Virharmonic
    (r'^VH[A-Z0-9]+\s+', 'Virharmonic'),
    (r'^VE[A-Z0-9]+\s+', 'Virharmonic'),

    # V2 (Big Band library)
    (r'^V2M2[A-Z0-9]?\s+', 'V2 Musics Big Band'),

    # Soundiron
    (r'^SI[A-Z0-9]+\s+', 'Soundiron'),

    # Sonokinetic
    (r'^SK[A-Z0-9]+\s+', 'Sonokinetic'),

    # Submission Audio (bass guitars)
    (r'^SA[A-Z0-9]+\s+', 'Submission Audio'),

    # Spitfire Studio (SS prefix that's not SSS/SSB/SSW)
    (r'^SSLC\s+', 'Sample Modeling'),
    (r'^SSLV\s+', 'Sample Modeling'),
    (r'^SSTB[A-Z0-9]*\s+', 'Spitfire Studio Brass'),
    (r'^SSTS[A-Z0-9]*\s+', 'Spitfire Studio Strings'),
    (r'^SSTW[A-Z0-9]*\s+', 'Spitfire Studio Woodwinds'),
    (r'^SS[A-Z0-9]+\s+', 'Spitfire Studio'),

    # Spitfire misc
    (r'^SP[A-Z0-9]+\s+', 'Spitfire'),
    (r'^SR[A-Z0-9]+\s+', 'Spitfire'),
    (r'^SX[A-Z0-9]+\s+', 'Spitfire'),

    # Rigid Audio
    (r'^RA[A-Z0-9]+\s+', 'Rigid Audio'),

    # Red Room Audio
    (r'^RW[A-Z0-9]+\s+', 'Red Room Audio'),

    # Sample Modeling
    (r'^SM[A-Z0-9]+\s+', 'Sample Modeling'),

    # Sample libraries with ID prefix
    (r'^ID[A-Z0-9]+\s+', 'Infinite'),
    (r'^IN[A-Z0-9]+\s+', 'Infinite'),

    # Xperimenta
    (r'^XP[A-Z0-9]+\s+', 'Xperimenta'),

    # UVI
    (r'^UV[A-Z0-9]+\s+', 'UVI'),
]

PREFIX_PATTERNS: List[Tuple['re.Pattern[str]', str]] = [
    (re.compile(pattern), library) for pattern, library in _PREFIX_RULES
]

# Libraries big enough to warrant an instrument level below the library
LARGE_LIBRARIES = frozenset([
    'VSL Synchron',
    'VSL Synchron-ized',
    'VSL Synchron Strings',
    'VSL SE',
    'Vienna Symphonic Library',
    'Orchestral Tools',
    'OT Berlin Brass',
    'OT Berlin Strings',
    'OT Berlin Woodwinds',
    'OT Metropolis Ark',
    'Spitfire Audio',
    'BBC Symphony Orchestra',
    'EW Hollywood Strings',
    'EW Hollywood Brass',
    'EW Hollywood Woodwinds',
    'EW Hollywood Orchestra',
    '8Dio Century',
    '8Dio Adagio',
    '8Dio Agitato',
    '8Dio',
])


# =============================================================================
# INSTRUMENT NAMES
# =============================================================================

# Leading ordinal/number token ("01 ", "11b ") stripped before matching
LEADING_NUMBER_REGEX = re.compile(r'^[0-9]+[a-z]?\s+')

# Century-style names put the section after the product name, so the
# matched text ("Century Ens Lite CB") is not a useful folder; these rules
# carry the canonical section label instead.
_CENTURY_SECTION = r'^Century\s+(?:Ens(?:emble)?|Str(?:ings)?|Solo)?\s*(?:Lite\s+)?'

# (pattern, label). A label of None means "use the matched text".
_INSTRUMENT_RULES = [
    # Strings
    (r'^((?:1st |2nd |First |Second )?Violin[s]?(?:\s*[1-2])?)\b', None),
    (r'^(Viola[s]?)\b', None),
    (r'^(Cell[oi]s?(?:\s*[1-2])?)\b', None),
    (r'^((?:Double |Upright )?Bass(?:es)?(?:\s*[1-2])?)\b', None),
    (r'^(Contrabass)\b', None),
    # Brass
    (r'^(Trumpet[s]?(?:\s*[1-3])?)\b', None),
    (r'^(Trombone[s]?)\b', None),
    (r'^((?:French )?Horn[s]?)\b', None),
    (r'^(Tuba[s]?)\b', None),
    (r'^(Wagner Tuba[s]?)\b', None),
    (r'^(Cornet[s]?)\b', None),
    (r'^(Flugelhorn)\b', None),
    (r'^(Euphoni[ou]m)\b', None),
    # Woodwinds
    (r'^(Flute[s]?)\b', None),
    (r'^(Oboe[s]?)\b', None),
    (r'^(Clarinet[s]?)\b', None),
    (r'^(Bassoon[s]?)\b', None),
    (r'^(Piccolo)\b', None),
    (r'^(English Horn)\b', None),
    (r'^(Woodwind[s]?)\b', None),
    # Percussion
    (r'^(Timpani)\b', None),
    (r'^(Percussion)\b', None),
    (r'^(Snare)\b', None),
    (r'^(Cymbals?)\b', None),
    (r'^(Xylophone)\b', None),
    (r'^(Marimba)\b', None),
    (r'^(Vibraphone)\b', None),
    (r'^(Glockenspiel)\b', None),
    # Keys
    (r'^(Piano)\b', None),
    (r'^(Harp)\b', None),
    (r'^(Celesta)\b', None),
    # Choir / Vocals
    (r'^(Choir)\b', None),
    (r'^(Soprano[s]?)\b', None),
    (r'^(Alto[s]?)\b', None),
    (r'^(Tenor[s]?)\b', None),
    (r'^(Basso?\s+\w+)', None),
    (r'^(ATB\s+\w+)', None),
    # Ensembles / Collections
    (r'^(Appassionata\s+\w+)', None),
    (r'^(Chamber\s+\w+)', None),
    (r'^(Synchron\s+\w+(?:\s+\w+)?)', None),
    (r'^(Epic\s+\w+)', None),
    (r'^(Fanfare\s+\w+)', None),
    (r'^(Dimension\s+\w+)', None),
    (r'^(Syzd\s+\w+(?:\s+\w+)?)', None),
    # Century-style naming (section at the end)
    (_CENTURY_SECTION + r'(?:Vln|Vn)\b', 'Violins'),
    (_CENTURY_SECTION + r'(?:Vla|Va)\b', 'Violas'),
    (_CENTURY_SECTION + r'(?:Vc|Vlc|Cello)\b', 'Cellos'),
    (_CENTURY_SECTION + r'(?:CB|Cb|Bass)\b', 'Basses'),
    (r'^Century\s+(?:Brass)\b', 'Brass'),
    (r'^Century\s+(?:Woodwinds?|WW)\b', 'Woodwinds'),
    (r'^Century\s+(?:Strings?|Str)\b', 'Strings'),
    # Generic Century catch-all by section
    (r'Century.*\b(?:Vln|Vn|Violin)', 'Violins'),
    (r'Century.*\b(?:Vla|Va|Viola)', 'Violas'),
    (r'Century.*\b(?:Vc|Vlc|Cello)', 'Cellos'),
    (r'Century.*\b(?:CB|Cb|Contrabass|Bass(?:es)?)', 'Basses'),
    (r'Century.*\b(?:Brass)', 'Brass'),
    (r'Century.*\b(?:WW|Woodwinds?)', 'Woodwinds'),
]

INSTRUMENT_PATTERNS: List[Tuple['re.Pattern[str]', Optional[str]]] = [
    (re.compile(pattern, re.IGNORECASE), label) for pattern, label in _INSTRUMENT_RULES
]

# Short codes matched anywhere in the name ("Century Ens Lite CB").
# "CB" is case sensitive: a lowercase "cb" shows up in ordinary words.
ABBREVIATION_PATTERNS: List[Tuple['re.Pattern[str]', str]] = [
    # Strings
    (re.compile(r'\b(?:Vln|Vn)\b', re.IGNORECASE), 'Violins'),
    (re.compile(r'\b(?:Vla|Va)\b', re.IGNORECASE), 'Violas'),
    (re.compile(r'\b(?:Vc|Vlc)\b', re.IGNORECASE), 'Cellos'),
    (re.compile(r'\bCB\b'), 'Basses'),
    # Brass
    (re.compile(r'\b(?:Tpt|Tp)\b', re.IGNORECASE), 'Trumpets'),
    (re.compile(r'\b(?:Tbn|Trb)\b', re.IGNORECASE), 'Trombones'),
    (re.compile(r'\b(?:Hn|Hrn)\b', re.IGNORECASE), 'Horns'),
    (re.compile(r'\bTba\b', re.IGNORECASE), 'Tubas'),
    # Woodwinds
    (re.compile(r'\bFl\b', re.IGNORECASE), 'Flutes'),
    (re.compile(r'\bOb\b', re.IGNORECASE), 'Oboes'),
    (re.compile(r'\bCl\b', re.IGNORECASE), 'Clarinets'),
    (re.compile(r'\b(?:Bn|Bsn)\b', re.IGNORECASE), 'Bassoons'),
    (re.compile(r'\bPicc?\b', re.IGNORECASE), 'Piccolo'),
    # Sections
    (re.compile(r'\bStr(?:ings)?\b', re.IGNORECASE), 'Strings'),
    (re.compile(r'\bBrass\b', re.IGNORECASE), 'Brass'),
    (re.compile(r'\b(?:WW|Woodwinds?)\b', re.IGNORECASE), 'Woodwinds'),
    (re.compile(r'\bPerc(?:ussion)?\b', re.IGNORECASE), 'Percussion'),
]


# =============================================================================
# FALLBACKS
# =============================================================================

# An all-caps code of 2-8 characters followed by the rest of the name
GENERIC_PREFIX_REGEX = re.compile(r'^([A-Z][A-Z0-9]{1,7})\s+(.+)$')

OTHER_FOLDER = 'Other'
