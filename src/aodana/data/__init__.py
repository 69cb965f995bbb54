"""Data structures and containers for event analysis.

Every table of the event data model is an append-only, columnar
:class:`Table` of rows of one data class. Rows refer to rows of other
tables through index columns (e.g. the `collision_id` of a track).

**Row classes:**
- `collision`: reconstructed collisions and bunch crossings
- `mc`: generated collisions and particles
- `track`: reconstructed tracks with their PID information
- `emcal`: EMCAL clusters and cluster definitions

**Containers:**
- `Table`: append-only table of rows of one data class
- `EventStore`: all the tables of one processing pass, with the
  index-column relations resolved when iterating over a table

**Example Usage:**
```python
from aodana.data import ClusterRecord, ClusterTable, Collision, Table

collisions = Table(Collision, "collisions")
collisions.append(Collision(pos_z=1.2, sel8=True))
clusters = ClusterTable.matched(collisions)
clusters.append(ClusterRecord(ref_id=0, energy=1.25))
```
"""

from .collision import *
from .emcal import *
from .mc import *
from .store import *
from .table import *
from .track import *

# Row class of each table recognized in input files
TABLE_CLASSES = {
    "bcs": BunchCrossing,
    "collisions": Collision,
    "mc_collisions": McCollision,
    "mc_particles": McParticle,
    "tracks": Track,
    "emcal_clusters_raw": RawCluster,
}
