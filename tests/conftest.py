import pytest

MAP_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="1.2" tiledversion="1.3.1" orientation="orthogonal" renderorder="right-down"
     width="3" height="2" tilewidth="32" tileheight="32" infinite="0" nextlayerid="4" nextobjectid="4">
 <properties>
  <property name="music" value="forest.ogg"/>
  <property name="gravity" type="float" value="9.8"/>
 </properties>
 <tileset firstgid="1" source="terrain.tsx"/>
 <tileset firstgid="41" source="props.tsx"/>
 <objectgroup id="2" name="Spawns" visible="0">
  <object id="1" name="player" type="spawn" x="16" y="24.5">
   <point/>
  </object>
  <object id="2" x="0" y="0" width="64" height="32" rotation="90">
   <ellipse/>
   <properties>
    <property name="damage" type="int" value="3"/>
   </properties>
  </object>
  <object id="3" x="32" y="64" width="32" height="32" gid="2147483690"/>
 </objectgroup>
 <layer id="1" name="Ground" width="3" height="2" visible="1">
  <properties>
   <property name="z" type="int" value="0"/>
  </properties>
  <data encoding="csv">
2147483653,5,0,
1073741866,536870913,3758096424
</data>
 </layer>
 <layer id="3" name="Overlay" width="3" height="2">
  <data encoding="csv">
0,0,0,
0,0,41
</data>
 </layer>
</map>
"""

TILESET_TSX = """<?xml version="1.0" encoding="UTF-8"?>
<tileset version="1.2" tiledversion="1.3.1" name="terrain" tilewidth="32" tileheight="32"
         tilecount="40" columns="8" spacing="1" objectalignment="BottomLeft">
 <image source="terrain.png" width="256" height="160"/>
 <terraintypes>
  <terrain name="Grass" tile="0"/>
  <terrain name="Water" tile="12"/>
 </terraintypes>
 <tile id="4" terrain="0,0,,1" type="shore">
  <properties>
   <property name="solid" type="bool" value="false"/>
   <property name="note">line one
line two</property>
  </properties>
  <animation>
   <frame tileid="4" duration="100"/>
   <frame tileid="5" duration="250"/>
  </animation>
 </tile>
 <tile id="12">
  <objectgroup draworder="index">
   <object id="1" x="0" y="16" width="32" height="16"/>
  </objectgroup>
  <image source="water_big.png" width="64" height="64"/>
 </tile>
 <properties>
  <property name="biome" value="forest"/>
 </properties>
</tileset>
"""


@pytest.fixture
def map_text():
    return MAP_TMX


@pytest.fixture
def tileset_text():
    return TILESET_TSX


@pytest.fixture
def map_dir(tmp_path):
    """Map on disk next to one of its two tilesets (props.tsx is missing)."""
    (tmp_path / "level.tmx").write_text(MAP_TMX, encoding="utf-8")
    (tmp_path / "terrain.tsx").write_text(TILESET_TSX, encoding="utf-8")
    return tmp_path
